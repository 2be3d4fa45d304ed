"""
Passkey provider lookup by AAGUID.

The bundled dataset follows
https://github.com/passkeydeveloper/passkey-authenticator-aaguids/blob/main/aaguid.json
(uuid string -> {name, icon_dark, icon_light}).

Unknown AAGUIDs are normal (synced and virtual authenticators often report all zeros),
so lookups return None instead of raising.
"""
import logging
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter

from webauthnkit.core.config import settings
from webauthnkit.core.credential import AuthnPublicKeyCredential
from webauthnkit.core.exceptions import InvalidLengthError
from webauthnkit.core.uuid_codec import parse, stringify

logger = logging.getLogger(__name__)


class AaguidEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    icon_dark: Optional[str] = None
    icon_light: Optional[str] = None


_entries_adapter = TypeAdapter(Dict[str, AaguidEntry])

AaguidKey = Union[str, bytes, bytearray, memoryview, AuthnPublicKeyCredential]


def get_aaguid(cred: AuthnPublicKeyCredential) -> str:
    """
    AAGUID of an attestation credential in uuid form, e.g. 'ea9b8d66-4d01-1d21-3ce4-b6b48cb575d4'.
    """
    return cred.aaguid


class AaguidRegistry(Mapping[str, AaguidEntry]):
    """
    Read-only AAGUID -> provider map. `extend()` and `without()` return new registries.
    """

    def __init__(self, entries: Optional[Mapping[str, AaguidEntry]] = None):
        normalized = {self._normalize_key(k): v for k, v in (entries or {}).items()}
        self._entries = MappingProxyType(normalized)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "AaguidRegistry":
        return cls(_entries_adapter.validate_json(data))

    @classmethod
    def from_file(cls, path: str) -> "AaguidRegistry":
        with open(path, "rb") as f:
            registry = cls.from_json(f.read())
        logger.debug(f"Loaded {len(registry)} AAGUID entries from {path}")
        return registry

    @staticmethod
    def format(data: Union[bytes, bytearray, memoryview]) -> str:
        """Raw 16-byte AAGUID to uuid form."""
        return stringify(data)

    @staticmethod
    def decode(aaguid: str) -> bytes:
        """Uuid form to raw 16-byte AAGUID."""
        return parse(aaguid)

    @staticmethod
    def _normalize_key(key: AaguidKey) -> str:
        if isinstance(key, AuthnPublicKeyCredential):
            return key.aaguid
        if isinstance(key, str):
            return key.lower()
        return stringify(key)

    def get(self, key: AaguidKey, default: Optional[AaguidEntry] = None) -> Optional[AaguidEntry]:
        """
        Looks up a uuid string (any case), raw 16 bytes, or an attestation credential.
        A raw buffer of any other length is not found.
        """
        try:
            normalized = self._normalize_key(key)
        except InvalidLengthError:
            return default
        return self._entries.get(normalized, default)

    def has(self, key: AaguidKey) -> bool:
        return self.get(key) is not None

    def __getitem__(self, key: AaguidKey) -> AaguidEntry:
        try:
            normalized = self._normalize_key(key)
        except InvalidLengthError as e:
            raise KeyError(key) from e
        return self._entries[normalized]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, bytes, bytearray, memoryview, AuthnPublicKeyCredential)):
            return False
        return self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def extend(self, entries: Union[Mapping[AaguidKey, AaguidEntry], Iterable[Tuple[AaguidKey, AaguidEntry]]]) -> "AaguidRegistry":
        """
        Returns a new registry with `entries` added (or replaced). The receiver is unchanged.
        """
        items = entries.items() if isinstance(entries, Mapping) else entries
        merged = dict(self._entries)
        for key, entry in items:
            if not isinstance(entry, AaguidEntry):
                entry = AaguidEntry.model_validate(entry)
            merged[self._normalize_key(key)] = entry
        return AaguidRegistry(merged)

    def without(self, keys: Iterable[AaguidKey]) -> "AaguidRegistry":
        """
        Returns a new registry without `keys`. The receiver is unchanged.
        """
        removed = {self._normalize_key(k) for k in keys}
        return AaguidRegistry({k: v for k, v in self._entries.items() if k not in removed})

    def __repr__(self):
        return f"AaguidRegistry({len(self)} entries)"


_registry_instance: Optional[AaguidRegistry] = None


def get_aaguid_registry() -> AaguidRegistry:
    """
    The process-wide registry, loaded from `settings.AAGUID_DATA_PATH` on first use.
    """
    global _registry_instance
    if _registry_instance is None:
        _registry_instance = AaguidRegistry.from_file(settings.AAGUID_DATA_PATH)
    return _registry_instance


class _RegistryProxy:
    def __getattr__(self, name: str):
        return getattr(get_aaguid_registry(), name)

    def __contains__(self, key: object) -> bool:
        return key in get_aaguid_registry()

    def __getitem__(self, key: AaguidKey) -> AaguidEntry:
        return get_aaguid_registry()[key]

    def __iter__(self) -> Iterator[str]:
        return iter(get_aaguid_registry())

    def __len__(self) -> int:
        return len(get_aaguid_registry())


aaguid_registry = _RegistryProxy()
