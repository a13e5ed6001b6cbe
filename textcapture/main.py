"""
/**
 * @file textcapture/main.py
 * @description FastAPI 应用入口（仅装配路由、CORS 与配置监听）。
 */
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from textcapture.config import CONFIG_LOCAL_PATH, CONFIG_PATH, load_settings, reload_settings
from textcapture.controllers import client_router, health_router, image_router, languages_router, translate_router
from textcapture.services import ClientBootstrap
from textcapture.services.client_bootstrap_service import HtmlProvider, html_file_provider


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ConfigEventHandler(FileSystemEventHandler):
    """Handler for config file changes"""
    def on_modified(self, event):
        if event.is_directory:
            return
        if event.src_path == CONFIG_PATH or event.src_path == CONFIG_LOCAL_PATH:
            reload_settings()


def create_app(
    client_url: Optional[str] = None,
    client_html_provider: Optional[HtmlProvider] = None,
    client_html_path: Optional[str] = None,
) -> FastAPI:
    """Build the gateway app; the client bootstrap is fixed here, not per request.

    Without explicit arguments the bootstrap comes from settings
    (``TEXT_CAPTURE_CLIENT_PATH`` / ``client.html_path`` first, then ``client.url``).
    """
    if client_html_path:
        client_html_provider = html_file_provider(client_html_path)
    if client_html_provider or client_url:
        bootstrap = ClientBootstrap(html_provider=client_html_provider, url=client_url)
    else:
        bootstrap = ClientBootstrap.from_settings(load_settings())

    app = FastAPI(title="TextCapture Server")
    app.state.client_bootstrap = bootstrap
    app.state.config_observer = None

    @app.on_event("startup")
    async def startup_event():
        load_settings()
        try:
            observer = Observer()
            config_dir = os.path.dirname(CONFIG_PATH)
            observer.schedule(ConfigEventHandler(), config_dir, recursive=False)
            observer.start()
            app.state.config_observer = observer
            logger.info(f"Config watcher started on {config_dir}")
        except OSError as e:
            logger.warning(f"Failed to start config watcher: {e}")

    @app.on_event("shutdown")
    async def shutdown_event():
        observer = app.state.config_observer
        if observer:
            observer.stop()
            observer.join()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(client_router)
    app.include_router(languages_router)
    app.include_router(image_router)
    app.include_router(translate_router)
    app.include_router(health_router)
    return app


app = create_app()
