"""Capa de transporte: dispatch y normalización de respuestas.

Por qué un paquete:
- Agrupa las cuatro formas de transporte (JSON, stream, blob, multipart).
- Todas devuelven `core.domain.outcome.Outcome`.
"""

from adapters.transport.blob import BlobReference, fetch_blob, publish_blob
from adapters.transport.dispatcher import dispatch
from adapters.transport.multipart import multipart_files, read_file_part, send_multipart
from adapters.transport.normalizer import normalize
from adapters.transport.stream import Utf8StreamDecoder, consume_stream

__all__ = [
	"BlobReference",
	"Utf8StreamDecoder",
	"consume_stream",
	"dispatch",
	"fetch_blob",
	"multipart_files",
	"normalize",
	"publish_blob",
	"read_file_part",
	"send_multipart",
]
