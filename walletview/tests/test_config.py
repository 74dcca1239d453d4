from walletview.config import load_settings


class TestSettings:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("WALLETVIEW_NUM_CONFIRMATIONS", "3")
        monkeypatch.setenv("WALLETVIEW_OFFLINE_GRACE", "30")
        monkeypatch.setenv("WALLETVIEW_CHAIN_ENDPOINT", "http://example.test/")

        settings = load_settings()

        assert settings.num_confirmations == 3
        assert settings.offline_grace == 30
        assert settings.chain_endpoint == "http://example.test"

    def test_bad_values_fall_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("WALLETVIEW_COINBASE_MATURITY", "lots")
        assert load_settings().coinbase_maturity == 100

    def test_regtest_profile(self, monkeypatch):
        # setenv first so teardown also undoes the profile's setdefault
        for key in ("WALLETVIEW_NUM_CONFIRMATIONS", "WALLETVIEW_CHAIN_ENDPOINT"):
            monkeypatch.setenv(key, "")
            monkeypatch.delenv(key)
        monkeypatch.setenv("WALLETVIEW_PROFILE", "regtest")

        settings = load_settings()

        assert settings.num_confirmations == 1
        assert settings.chain_endpoint == "http://127.0.0.1:18443"
