"""File-backed persistence for credits, redeemed keys and the device id.

Credit state lives in a tiny key-value store (a single JSON object mapping
string keys to string values) kept in the configured data directory.  It
plays the role browser local storage plays for a web client: one store per
installation, read on startup, written synchronously after every change.

Stored Keys
-----------
=====================  ===================================================
Key                    Value
=====================  ===================================================
``mockup_credits``     Credit count as a decimal string (``"3"``)
``mockup_used_keys``   JSON-encoded list of redeemed keys
``mockup_device_id``   Opaque device identifier, generated once
=====================  ===================================================

Credits and used keys are written as two separate operations.  There is no
transaction across them: a crash in between can leave them out of step,
which is accepted because both are advisory, locally trusted values.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .credits import CreditState, generate_device_id

logger = logging.getLogger(__name__)

CREDITS_KEY = "mockup_credits"
USED_KEYS_KEY = "mockup_used_keys"
DEVICE_ID_KEY = "mockup_device_id"

DEFAULT_INITIAL_CREDITS = 3


class LocalStore:
    """Synchronous string key-value store persisted as one JSON file.

    A missing, empty, or corrupt file reads as an empty store; the next
    write replaces it.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable store {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2)


class CreditStore:
    """Loads and saves :class:`CreditState` through a :class:`LocalStore`.

    Attributes:
        store: Underlying key-value store.
        initial_credits: Credits granted when nothing has been stored yet.
    """

    def __init__(self, path: Path, initial_credits: int = DEFAULT_INITIAL_CREDITS) -> None:
        self.store = LocalStore(path)
        self.initial_credits = initial_credits

    def load(self) -> CreditState:
        """Read the persisted credit state.

        A device identifier is generated and written immediately when none
        is stored, so it stays stable for the life of the installation.
        """
        device_id = self.store.get(DEVICE_ID_KEY)
        if not device_id:
            device_id = generate_device_id()
            self.store.set(DEVICE_ID_KEY, device_id)
            logger.info(f"Generated new device id: {device_id}")

        return CreditState(
            credits=self._load_credits(),
            used_keys=self._load_used_keys(),
            device_id=device_id,
        )

    def _load_credits(self) -> int:
        raw = self.store.get(CREDITS_KEY)
        if raw is None:
            return self.initial_credits
        try:
            return int(raw, 10)
        except ValueError:
            logger.warning(f"Stored credit count {raw!r} is not an integer; using default")
            return self.initial_credits

    def _load_used_keys(self) -> tuple[str, ...]:
        raw = self.store.get(USED_KEYS_KEY)
        if not raw:
            return ()
        try:
            keys = json.loads(raw)
        except ValueError:
            logger.warning("Stored used-key list is not valid JSON; treating as empty")
            return ()
        if not isinstance(keys, list):
            return ()
        return tuple(str(key) for key in keys)

    def save(self, state: CreditState) -> None:
        """Persist credits, then the used-key list."""
        self.store.set(CREDITS_KEY, str(state.credits))
        self.store.set(USED_KEYS_KEY, json.dumps(list(state.used_keys)))
