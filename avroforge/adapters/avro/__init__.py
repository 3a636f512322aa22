from avroforge.adapters.avro.container import AvroContainerEncoder, DecodedContainer, decode_container

__all__ = ["AvroContainerEncoder", "DecodedContainer", "decode_container"]
