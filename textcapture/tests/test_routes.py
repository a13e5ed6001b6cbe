"""
/**
 * @file textcapture/tests/test_routes.py
 * @description HTTP 路由测试（TestClient）。
 */
"""

import base64
import os
import unittest
from io import BytesIO
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from PIL import Image

from textcapture.config import Settings
from textcapture.main import create_app
from textcapture.services import ClientBootstrap, RecognitionError
from textcapture.tests.fakes import FakePapagoClient, oversized_png


def png_data_uri() -> str:
    buf = BytesIO()
    Image.new("RGB", (8, 8), (255, 255, 255)).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


class RouteTestCase(unittest.TestCase):
    def setUp(self):
        self.app = create_app(client_url="https://textcapture.surge.sh?server=http%3A%2F%2Flocalhost%3A4444")
        self.client = TestClient(self.app)


class TestTranslateRoute(RouteTestCase):
    def _post(self, backend, body=None, content=None):
        with patch("textcapture.services.translation_service.PapagoClient.instance", return_value=backend):
            if content is not None:
                return self.client.post("/translate", content=content)
            return self.client.post("/translate", json=body)

    def test_defaults_and_success(self):
        backend = FakePapagoClient(result="안녕")
        r = self._post(backend, {"text": "hello"})

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.text, "안녕")
        self.assertTrue(r.headers["content-type"].startswith("text/plain"))
        self.assertEqual(backend.calls, [{"text": "hello", "source": "auto", "target": "en", "honorific": None}])

    def test_backend_error_is_500_with_message(self):
        r = self._post(FakePapagoClient(error=RuntimeError("backend down")), {"text": "hello", "target": "ko"})
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.text, "backend down")

    def test_no_result_is_204(self):
        r = self._post(FakePapagoClient(), {"text": "hello"})
        self.assertEqual(r.status_code, 204)

    def test_empty_text_never_reaches_backend(self):
        backend = FakePapagoClient(result="x")
        r = self._post(backend, {"text": "", "source": "en"})

        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.text, "No text to translate")
        self.assertEqual(backend.calls, [])

    def test_unparseable_body(self):
        backend = FakePapagoClient(result="x")
        for content in (b"nope", b'{"text": 3}'):
            r = self._post(backend, content=content)
            self.assertEqual(r.status_code, 400)
            self.assertEqual(r.text, "Could not parse body")
        self.assertEqual(backend.calls, [])

    def test_timeout_is_504(self):
        settings = Settings(raw={"translation": {"timeout_seconds": 0.05}})
        with patch("textcapture.services.translation_service.load_settings", return_value=settings):
            r = self._post(FakePapagoClient(fire=False), {"text": "hello"})
        self.assertEqual(r.status_code, 504)
        self.assertEqual(r.text, "Translation timed out")


class TestImageRoute(RouteTestCase):
    def setUp(self):
        super().setUp()
        self.recognizer = MagicMock()
        patcher = patch("textcapture.controllers.image_controller.get_recognizer", return_value=self.recognizer)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_recognition_result_is_forwarded(self):
        fragments = [{"text": "Hello", "confidence": 0.9, "boundingBox": {"x": 0, "y": 0, "width": 5, "height": 5}}]
        self.recognizer.recognize.return_value = fragments

        r = self.client.post("/image", json={"image": png_data_uri()})

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), fragments)
        image, languages = self.recognizer.recognize.call_args[0]
        self.assertEqual(image.size, (8, 8))
        self.assertEqual(languages, ["en"])

    def test_lang_is_passed_through(self):
        self.recognizer.recognize.return_value = []
        r = self.client.post("/image", json={"image": png_data_uri(), "lang": "ko"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(self.recognizer.recognize.call_args[0][1], ["ko"])

    def test_missing_image(self):
        r = self.client.post("/image", json={"lang": "en"})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.text, "Could not find base64 image")
        self.recognizer.recognize.assert_not_called()

    def test_undecodable_image(self):
        r = self.client.post("/image", json={"image": "not-base64!!"})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.text, "Could not decode base64 image")
        self.recognizer.recognize.assert_not_called()

    def test_unloadable_image(self):
        r = self.client.post("/image", json={"image": base64.b64encode(b"hello").decode("ascii")})
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.text, "Could not load image")
        self.recognizer.recognize.assert_not_called()

    def test_oversized_image(self):
        payload = base64.b64encode(oversized_png()).decode("ascii")
        r = self.client.post("/image", json={"image": "data:image/png;base64," + payload})
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.text, "Could not load image")
        self.recognizer.recognize.assert_not_called()

    def test_recognition_failure(self):
        self.recognizer.recognize.side_effect = RecognitionError("tesseract crashed")
        r = self.client.post("/image", json={"image": png_data_uri()})
        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.text, "Could not recognize text")


class TestLanguageRoutes(RouteTestCase):
    @patch("textcapture.services.language_catalog_service.get_recognizer")
    def test_source_languages(self, mock_get):
        mock_get.return_value.supported_languages.return_value = ["ko", "en", "zh-Hant"]

        r = self.client.get("/source-languages")

        self.assertEqual(r.status_code, 200)
        self.assertEqual([e["code"] for e in r.json()], ["ko", "en", "zh-Hant"])
        self.assertEqual(r.json()[2], {"name": "中文(繁體)", "code": "zh-Hant"})

    @patch("textcapture.services.language_catalog_service.get_recognizer")
    def test_source_languages_failure_message(self, mock_get):
        mock_get.return_value.supported_languages.side_effect = RecognitionError("tesseract missing")
        r = self.client.get("/source-languages")
        self.assertEqual(r.text, "Could not get recognition languages")

    def test_target_languages_default_source(self):
        default = self.client.get("/target-languages")
        english = self.client.get("/target-languages", params={"source": "en"})
        self.assertEqual(default.status_code, 200)
        self.assertEqual(default.json(), english.json())

        korean = self.client.get("/target-languages", params={"source": "ko"})
        self.assertIn("en", [e["code"] for e in korean.json()])

    def test_cors_allows_any_origin(self):
        r = self.client.get("/target-languages", headers={"Origin": "chrome-extension://abc"})
        self.assertEqual(r.headers.get("access-control-allow-origin"), "*")


class TestHealthRoute(RouteTestCase):
    def _get(self, settings, version, env):
        recognizer = MagicMock()
        recognizer.version.return_value = version
        with patch("textcapture.config.load_settings", return_value=settings), \
                patch("textcapture.services.get_recognizer", return_value=recognizer), \
                patch.dict(os.environ, env):
            if not env:
                os.environ.pop("PAPAGO_CLIENT_ID", None)
                os.environ.pop("PAPAGO_CLIENT_SECRET", None)
            return self.client.get("/health")

    def test_degraded_without_tesseract_or_credentials(self):
        r = self._get(Settings(raw={}), None, {})

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {
            "status": "degraded",
            "checks": {
                "api_keys": {"papago": False},
                "ocr": {"tesseract_available": False, "tesseract_version": None},
            },
        })

    def test_degraded_when_only_tesseract_is_missing(self):
        env = {"PAPAGO_CLIENT_ID": "id", "PAPAGO_CLIENT_SECRET": "secret"}
        r = self._get(Settings(raw={}), None, env)

        self.assertEqual(r.json()["status"], "degraded")
        self.assertEqual(r.json()["checks"]["api_keys"], {"papago": True})

    def test_ok_with_tesseract_and_credentials(self):
        env = {"PAPAGO_CLIENT_ID": "id", "PAPAGO_CLIENT_SECRET": "secret"}
        r = self._get(Settings(raw={}), "5.3.0", env)

        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {
            "status": "ok",
            "checks": {
                "api_keys": {"papago": True},
                "ocr": {"tesseract_available": True, "tesseract_version": "5.3.0"},
            },
        })


class TestClientRoute(unittest.TestCase):
    def test_html_provider_wins(self):
        app = create_app(client_url="https://textcapture.surge.sh", client_html_provider=lambda: "<html>capture</html>")
        r = TestClient(app).get("/")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.text, "<html>capture</html>")

    def test_redirect_to_client_url(self):
        app = create_app(client_url="https://textcapture.surge.sh?server=http%3A%2F%2Flocalhost%3A4444")
        r = TestClient(app).get("/", follow_redirects=False)
        self.assertEqual(r.status_code, 301)
        self.assertEqual(r.headers["location"], "https://textcapture.surge.sh?server=http%3A%2F%2Flocalhost%3A4444")

    def test_provider_without_html_falls_back_to_redirect(self):
        app = create_app(client_url="https://textcapture.surge.sh", client_html_provider=lambda: None)
        r = TestClient(app).get("/", follow_redirects=False)
        self.assertEqual(r.status_code, 301)

    def test_no_client(self):
        app = create_app(client_url="https://unused")
        app.state.client_bootstrap = ClientBootstrap()
        r = TestClient(app).get("/")
        self.assertEqual(r.text, "Could not get client")


if __name__ == "__main__":
    unittest.main()
