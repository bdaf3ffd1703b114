from __future__ import annotations

from html import escape
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse

from appgen.utils import fileutils

router = APIRouter(tags=["assets"])

# Files themselves are served by the StaticFiles mount; these routes only
# answer directory URLs (trailing slash), which StaticFiles does not list.
@router.get("/static/", response_class=HTMLResponse)
@router.get("/static/{subdir:path}/", response_class=HTMLResponse)
async def list_static(request: Request, subdir: str = "") -> HTMLResponse:
    entries = fileutils.list_directory(request.app.state.static_dir, subdir)
    if entries is None:
        raise HTTPException(status_code=404, detail="Directory not found")

    title = escape(f"/static/{subdir}/" if subdir else "/static/")
    items = []
    if subdir:
        items.append('<li><a href="../">../</a></li>')
    for name, is_dir in entries:
        suffix = "/" if is_dir else ""
        items.append(f'<li><a href="{quote(name)}{suffix}">{escape(name)}{suffix}</a></li>')

    return HTMLResponse(
        f"<html><head><title>Index of {title}</title></head><body>"
        f"<h1>Index of {title}</h1><ul>{''.join(items)}</ul></body></html>"
    )
