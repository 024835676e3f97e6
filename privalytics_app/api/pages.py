from pathlib import Path

from fastapi import APIRouter, Response
from fastapi.responses import FileResponse

router = APIRouter(tags=["pages"])

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

# Embedded as <script src=".../script.js" data-site-id="..."></script>.
# Posts {siteId, path} once per page load via sendBeacon, which survives
# unload. The collector URL is resolved against the script's own src.
TRACKING_SCRIPT = (
    "(function(){"
    "var s=document.currentScript;"
    "var siteId=(s&&s.getAttribute('data-site-id'))||'';"
    "var url=s&&s.src?new URL('/api/track',s.src).href:'/api/track';"
    "navigator.sendBeacon(url,JSON.stringify({siteId:siteId,path:window.location.pathname}));"
    "})();"
)


@router.get("/script.js", include_in_schema=False)
def tracking_script():
    """Static tracking snippet, no per-request templating"""
    return Response(content=TRACKING_SCRIPT, media_type="application/javascript")


@router.get("/", include_in_schema=False)
def dashboard():
    """Static dashboard, talks to the JSON API from the browser"""
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")
