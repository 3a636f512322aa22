"""Services – the transcoding engine: cache, extractor, transcoder, collapser."""

from avroforge.services.collapser import BatchCollapser
from avroforge.services.extractor import PayloadExtractor
from avroforge.services.interceptor import HeaderInterceptor
from avroforge.services.schema_cache import SchemaCache
from avroforge.services.transcoder import FieldTranscoder

__all__ = [
    "BatchCollapser",
    "FieldTranscoder",
    "HeaderInterceptor",
    "PayloadExtractor",
    "SchemaCache",
]
