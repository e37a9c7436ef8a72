"""Interface IdGenerator - port for unique identifiers."""

import secrets
import string
import time
import uuid
from abc import ABC, abstractmethod


class IdGenerator(ABC):
    """
    Port for identifier generation.

    Lets tests inject predictable identifiers.
    """

    @abstractmethod
    def generate_session_id(self) -> str:
        """
        Unique booking session id.

        Returns:
            UUID v4 string.
        """
        raise NotImplementedError

    @abstractmethod
    def generate_idempotency_key(self) -> str:
        """
        Idempotency key sent as the supplier's ClientReferenceId.

        One key per booking attempt; a restarted session gets a new one.
        """
        raise NotImplementedError

    @abstractmethod
    def generate_booking_reference_id(self) -> str:
        """Our booking reference, sent with the commit and usable for lookups."""
        raise NotImplementedError


class RealIdGenerator(IdGenerator):
    """Random identifiers."""

    SUFFIX_LENGTH = 7
    ALLOWED_CHARS = string.ascii_lowercase + string.digits

    def generate_session_id(self) -> str:
        return str(uuid.uuid4())

    def generate_idempotency_key(self) -> str:
        return f"TS_{self._timestamp_ms()}_{self._suffix()}"

    def generate_booking_reference_id(self) -> str:
        return f"BOOK_{self._timestamp_ms()}_{self._suffix()}"

    def _suffix(self) -> str:
        return "".join(secrets.choice(self.ALLOWED_CHARS) for _ in range(self.SUFFIX_LENGTH))

    @staticmethod
    def _timestamp_ms() -> int:
        return int(time.time() * 1000)


class FakeIdGenerator(IdGenerator):
    """
    Fake implementation for tests.

    Generates predictable, counter-based values.
    """

    def __init__(self, prefix: str = "TEST"):
        """
        Args:
            prefix: Prefix for generated values.
        """
        self._prefix = prefix
        self._session_counter = 0
        self._idem_counter = 0
        self._reference_counter = 0

    def generate_session_id(self) -> str:
        self._session_counter += 1
        hex_value = f"{self._session_counter:032x}"
        return f"{hex_value[:8]}-{hex_value[8:12]}-{hex_value[12:16]}-{hex_value[16:20]}-{hex_value[20:]}"

    def generate_idempotency_key(self) -> str:
        self._idem_counter += 1
        return f"idem-{self._prefix.lower()}-{self._idem_counter:06d}"

    def generate_booking_reference_id(self) -> str:
        self._reference_counter += 1
        return f"BOOK-{self._prefix}-{self._reference_counter:04d}"

    def reset(self) -> None:
        self._session_counter = 0
        self._idem_counter = 0
        self._reference_counter = 0
