"""Settings for running difftastic and building diff views."""

from dataclasses import dataclass, field
import json
from typing import Dict

from diffview.diffview_exceptions import DiffViewSettingsError


SUPPORTED_VCS = ("git", "jj")


@dataclass
class DiffViewSettings:
    """
    Diff view settings.
    """
    vcs: str = "git"
    difft_command: str = "difft"
    max_workers: int | None = None  # None means use the executor's default
    extra_environment: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.vcs, str):
            raise DiffViewSettingsError(
                f"vcs must be a string, got {self.vcs!r}",
                {"vcs": self.vcs}
            )

        if not isinstance(self.difft_command, str) or not self.difft_command:
            raise DiffViewSettingsError(
                f"difft_command must be a non-empty string, got {self.difft_command!r}",
                {"difft_command": self.difft_command}
            )

        if self.max_workers is not None and (
            isinstance(self.max_workers, bool) or not isinstance(self.max_workers, int)
        ):
            raise DiffViewSettingsError(
                f"max_workers must be an integer, got {self.max_workers!r}",
                {"max_workers": self.max_workers}
            )

        if self.vcs not in SUPPORTED_VCS:
            raise DiffViewSettingsError(
                f"Unsupported version control system: {self.vcs}",
                {"vcs": self.vcs, "supported": list(SUPPORTED_VCS)}
            )

        if self.max_workers is not None and self.max_workers < 1:
            raise DiffViewSettingsError(f"max_workers must be at least 1, got {self.max_workers}")

    @classmethod
    def create_default(cls) -> "DiffViewSettings":
        """Create a new DiffViewSettings object with default values."""
        return cls()

    @classmethod
    def load(cls, path: str) -> "DiffViewSettings":
        """
        Load settings from file.

        Args:
            path: Path to the settings file

        Returns:
            DiffViewSettings object with loaded values

        Raises:
            DiffViewSettingsError: If the file can't be read or holds invalid settings
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)

        except (OSError, json.JSONDecodeError) as e:
            raise DiffViewSettingsError(f"Failed to load settings from {path}: {e}", {"path": path}) from e

        if not isinstance(data, dict):
            raise DiffViewSettingsError(f"Settings file {path} must contain a JSON object", {"path": path})

        default = cls.create_default()
        extra_environment = data.get("extraEnvironment", {})
        if not isinstance(extra_environment, dict):
            raise DiffViewSettingsError("extraEnvironment must be an object", {"path": path})

        return cls(
            vcs=data.get("vcs", default.vcs),
            difft_command=data.get("difftCommand", default.difft_command),
            max_workers=data.get("maxWorkers", default.max_workers),
            extra_environment={str(k): str(v) for k, v in extra_environment.items()}
        )

    def save(self, path: str) -> None:
        """
        Save settings to file.

        Args:
            path: Path to save settings to
        """
        data = {
            "vcs": self.vcs,
            "difftCommand": self.difft_command,
            "maxWorkers": self.max_workers,
            "extraEnvironment": self.extra_environment
        }

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
