from pathlib import Path

import yaml

TODO_DIR = Path.home() / ".todo"
CONFIG_PATH = TODO_DIR / "config.yaml"
TASKS_PATH = TODO_DIR / "tasks.txt"
LOG_PATH = TODO_DIR / "todo.log"

DEFAULT_LOG_LEVEL = "WARNING"


class Config:
    """Single-instance config manager. Load once, cache in memory."""

    _instance: "Config | None" = None
    _data: dict[str, object]

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._data = {}
            cls._instance._load()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next access re-reads disk."""
        cls._instance = None

    def _load(self) -> None:
        """Load config from disk."""
        if not CONFIG_PATH.exists():
            self._data = {}
            return
        try:
            with CONFIG_PATH.open() as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError):
            loaded = None
        self._data = loaded if isinstance(loaded, dict) else {}

    def _save(self) -> None:
        """Persist config to disk."""
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        with CONFIG_PATH.open("w") as f:
            yaml.dump(self._data, f, default_flow_style=False, allow_unicode=True)

    def get(self, key: str, default: object = None) -> object:
        """Get config value."""
        return self._data.get(key, default)

    def set(self, key: str, value: object) -> None:
        """Set config value and persist."""
        self._data[key] = value
        self._save()


def get_tasks_path() -> Path:
    """Task file location; `tasks_file` in config.yaml overrides the default."""
    val = Config().get("tasks_file")
    if isinstance(val, str) and val.strip():
        return Path(val.strip()).expanduser()
    return TASKS_PATH


def set_tasks_path(path: str) -> None:
    Config().set("tasks_file", path)


def get_log_level() -> str:
    val = Config().get("log_level")
    return str(val).strip().upper() if val else DEFAULT_LOG_LEVEL
