import unittest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from app.config.settings import Settings
from app.main import app


class AppLifecycleTest(unittest.TestCase):
    def setUp(self):
        self.original_action = app.state.token_price_action
        self.original_build_action = app.state.build_action
        self.original_get_settings = app.state.get_settings
        self.settings = Settings()
        app.state.get_settings = lambda: self.settings
        app.state.token_price_action = None

    def tearDown(self):
        app.state.token_price_action = self.original_action
        app.state.build_action = self.original_build_action
        app.state.get_settings = self.original_get_settings

    def test_catalog_is_loaded_once_on_startup(self):
        action = MagicMock()
        action.get_metadata.return_value.model_dump.return_value = {"manifest": {}}
        app.state.build_action = MagicMock(return_value=action)

        with TestClient(app) as client:
            client.get("/token-price/metadata")
            client.get("/token-price/metadata")

        app.state.build_action.assert_called_once_with(self.settings)
        self.assertIs(app.state.token_price_action, action)

    def test_catalog_load_failure_aborts_startup(self):
        app.state.build_action = MagicMock(side_effect=RuntimeError("coingecko down"))

        with self.assertRaises(RuntimeError):
            with TestClient(app):
                pass


if __name__ == "__main__":
    unittest.main()
