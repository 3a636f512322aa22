from avroforge.config import Config


def test_defaults():
    cfg = Config()
    assert cfg.envelope_key == "gpsrecord"
    assert cfg.schema_url_header == "flume.avro.schema.url"
    assert cfg.dead_letter_topic == ""


def test_from_env(monkeypatch):
    monkeypatch.setenv("ENVELOPE_KEY", "beamrecord")
    monkeypatch.setenv("BATCH_SIZE", "25")
    monkeypatch.setenv("POLL_TIMEOUT_S", "0.2")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("DEAD_LETTER_TOPIC", "gpsrecord.dlq")

    cfg = Config.from_env()

    assert cfg.envelope_key == "beamrecord"
    assert cfg.batch_size == 25
    assert cfg.poll_timeout_s == 0.2
    assert cfg.log_level == "DEBUG"
    assert cfg.dead_letter_topic == "gpsrecord.dlq"
    assert cfg.output_topic == Config.output_topic
