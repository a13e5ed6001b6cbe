"""
/**
 * @file textcapture/scripts/serve.py
 * @description 启动网关服务（uvicorn）。
 */
"""

import argparse

import uvicorn

from textcapture.config import load_settings
from textcapture.main import create_app
from textcapture.services import with_server_param


def main():
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Run the TextCapture gateway server")
    parser.add_argument("--host", default=settings.server_host)
    parser.add_argument("--port", type=int, default=settings.server_port)
    parser.add_argument("--client-url", default=settings.client_url, help="hosted client to redirect / to")
    parser.add_argument("--client-html", default=settings.client_html_path, help="HTML file served at /")
    args = parser.parse_args()

    server_url = f"http://localhost:{args.port}"
    client_url = with_server_param(args.client_url, server_url) if args.client_url else None
    app = create_app(client_url=client_url, client_html_path=args.client_html)

    print(f"Running at {server_url}")
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
