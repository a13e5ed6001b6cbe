"""
/**
 * @file textcapture/controllers/client_controller.py
 * @description 客户端入口控制器（HTML / 301 重定向 / 提示文本）。
 */
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse


router = APIRouter()


@router.get("/")
def get_client(request: Request):
    bootstrap = request.app.state.client_bootstrap
    html = bootstrap.html()
    if html is not None:
        return HTMLResponse(html)
    if bootstrap.url:
        return RedirectResponse(bootstrap.url, status_code=301)
    return PlainTextResponse("Could not get client")
