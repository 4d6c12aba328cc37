import os
import yaml
import keyring

from settings_schema import MatcherSettings, validate_settings


class YamlConfig:
    """YAML settings file whose API keys can live in the OS keyring.

    With ``ENCRYPT_SETTINGS=1`` every key in ``SENSITIVE_KEYS`` is written to
    the keyring and stored as ``true`` in the file.
    """

    # read by the generative-service and hosted-store clients, not by this package
    SENSITIVE_KEYS = {
        "gemini_api_key",
        "supabase_service_key",
    }

    def __init__(self, path: str = "settings.yaml", service: str = "fitmatch") -> None:
        self.path = path
        self.service = service
        self.encrypt = os.environ.get("ENCRYPT_SETTINGS") == "1"

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not self.encrypt:
            return data
        for key in self.SENSITIVE_KEYS & set(data):
            secret = keyring.get_password(self.service, key)
            if secret is None:
                del data[key]
            else:
                data[key] = secret
        return data

    def save(self, data: dict) -> None:
        out = dict(data)
        if self.encrypt:
            for key in self.SENSITIVE_KEYS & set(out):
                keyring.set_password(self.service, key, str(out[key]))
                out[key] = True
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(out, f)


def load_settings(path: str = "settings.yaml") -> MatcherSettings:
    """Return validated matcher settings from ``path``."""
    data = YamlConfig(path).load()
    known = {k: v for k, v in data.items() if k in MatcherSettings.model_fields}
    return validate_settings(known)
