"""Resultado normalizado de una operación.

Por qué un tagged union:
- Todas las formas de transporte (JSON, stream, blob, multipart) terminan en
  `Success` o `Failure`, así el binder y los sinks no conocen el transporte.
- Los tests pueden comprobar cada variante igual, sin mocks del sink.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ErrorKind(str, Enum):
    """Taxonomía de errores visibles para el usuario."""

    TRANSPORT = "transport"
    STRUCTURED = "structured"
    PRECONDITION = "precondition"
    STREAM = "stream"
    UNEXPECTED = "unexpected"


class OperationFailed(Exception):
    """Forma de excepción de un `Failure` (ver `Outcome.unwrap`)."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.UNEXPECTED) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind


@dataclass(frozen=True)
class Success:
    payload: Any

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Any:
        return self.payload


@dataclass(frozen=True)
class Failure:
    message: str
    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __post_init__(self) -> None:
        # Un Failure nunca llega al sink con texto vacío.
        if not self.message or not self.message.strip():
            object.__setattr__(self, "message", f"{self.kind.value} error")

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise OperationFailed(self.message, self.kind)


Outcome = Union[Success, Failure]


def status_failure(status_code: int, reason_phrase: str) -> Failure:
    """`Failure` de transporte con el formato literal `"<status> <reason>"`."""

    return Failure(f"{status_code} {reason_phrase}".strip(), ErrorKind.TRANSPORT)


def failure_from_exception(exc: BaseException) -> Failure:
    if isinstance(exc, OperationFailed):
        return Failure(exc.message, exc.kind)
    return Failure(str(exc) or exc.__class__.__name__, ErrorKind.UNEXPECTED)
