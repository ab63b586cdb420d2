"""
Script library.

Loads dialogue scripts from a directory. `*.json` files hold the script
mapping directly; `*.dialog` files are compiled on load. The file stem
is the script id.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import jsonschema

from parley.config import DialogueConfig
from parley.core.events import EventBus
from parley.dialog.actions import ActionHandler
from parley.dialog.conversation import Conversation
from parley.dialog.parser import DialogParser
from parley.dialog.variables import VariableStore
from parley.errors import ScriptNotFoundError

SCRIPT_EXTENSIONS = {'.json', '.dialog'}

SCRIPT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["entry"],
    "additionalProperties": {
        "type": "array",
        "items": {"type": "string"},
    },
}


class ScriptLibrary:
    """
    Central storage for dialogue scripts.

    Invalid files are logged and skipped; the rest of the directory
    still loads.
    """

    def __init__(self, data_path: Path | str, config: Optional[DialogueConfig] = None):
        self._data_path = Path(data_path)
        self.config = config
        self._parser = DialogParser()
        self._scripts: dict[str, dict[str, list[str]]] = {}

        self.logger = logging.getLogger(__name__)

    @property
    def path(self) -> Path:
        return self._data_path

    def load_all(self) -> int:
        """
        Load every script file in the directory.

        Returns:
            Number of scripts loaded
        """
        self._scripts.clear()

        if not self._data_path.exists():
            self.logger.warning(f"Script directory not found: {self._data_path}")
            return 0

        for file_path in sorted(self._data_path.iterdir()):
            if file_path.suffix.lower() in SCRIPT_EXTENSIONS:
                self.reload(file_path)

        self.logger.info(f"Loaded {len(self._scripts)} dialogue scripts.")
        return len(self._scripts)

    def reload(self, path: Path | str) -> bool:
        """
        Load (or reload) a single script file.

        Returns:
            True if the script was loaded
        """
        path = Path(path)
        try:
            data = self._read(path)
            jsonschema.validate(instance=data, schema=SCRIPT_SCHEMA)
        except jsonschema.ValidationError as e:
            self.logger.error(f"Validation error in {path}: {e.message}")
            return False
        except (OSError, ValueError) as e:
            self.logger.error(f"Failed to load {path}: {e}")
            return False

        self._scripts[path.stem] = data
        self.logger.debug(f"Loaded dialogue script {path.stem}")
        return True

    def discard(self, path: Path | str) -> bool:
        """Forget the script loaded from a path."""
        return self._scripts.pop(Path(path).stem, None) is not None

    def _read(self, path: Path) -> Any:
        if path.suffix.lower() == '.dialog':
            return self._parser.to_json(self._parser.parse_file(path))

        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def get(self, script_id: str) -> dict[str, list[str]] | None:
        return self._scripts.get(script_id)

    def ids(self) -> list[str]:
        return sorted(self._scripts)

    def create_conversation(
        self,
        script_id: str,
        handler: Optional[ActionHandler] = None,
        speaker: Any = None,
        store: Optional[VariableStore] = None,
        events: Optional[EventBus] = None,
    ) -> Conversation:
        """
        Start a new conversation from a loaded script.

        Raises:
            ScriptNotFoundError: If no script with that id is loaded
        """
        script = self._scripts.get(script_id)
        if script is None:
            raise ScriptNotFoundError(script_id)

        return Conversation(
            script,
            handler=handler,
            speaker=speaker,
            store=store,
            events=events,
            config=self.config,
        )

    def __contains__(self, script_id: object) -> bool:
        return script_id in self._scripts

    def __len__(self) -> int:
        return len(self._scripts)
