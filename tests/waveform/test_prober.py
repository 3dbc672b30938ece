import pytest

from rwe_backend.features.waveform.prober import MetadataProber, metadata_from_probe, stat_audio_file
from rwe_backend.shared import ErrorCode
from rwe_backend.tool_detect import DecoderAvailability
from tests.fakes import FakeFFProbe, probe_payload

AVAILABLE = DecoderAvailability(available=True, ffprobe_available=True)


def test_metadata_from_probe_reads_format_and_stream() -> None:
    res = metadata_from_probe(probe_payload(duration="183.25", sample_rate="48000", channels=1), "mp3", 2000)

    assert res.ok
    meta = res.data
    assert meta.duration == pytest.approx(183.25)
    assert meta.sample_rate == 48000
    assert meta.channels == 1
    assert meta.bit_rate == 128000
    assert meta.format == "mp3"
    assert meta.file_size == 2000


def test_metadata_from_probe_applies_defaults() -> None:
    payload = probe_payload(duration="N/A", sample_rate="0", channels=None, bit_rate=None)

    meta = metadata_from_probe(payload, "wav", 10).data

    assert meta.duration == 0.0
    assert meta.sample_rate == 44100
    assert meta.channels == 2
    assert meta.bit_rate == 0


def test_metadata_from_probe_without_audio_stream() -> None:
    res = metadata_from_probe({"format": {"duration": "5"}, "streams": [{"codec_type": "video"}]}, "mp4", 1)

    assert not res.ok
    assert res.code == ErrorCode.NO_AUDIO_STREAM.value


def test_stat_audio_file_missing(tmp_path) -> None:
    assert stat_audio_file(str(tmp_path / "nope.mp3")).code == ErrorCode.NOT_FOUND.value
    assert stat_audio_file(str(tmp_path)).code == ErrorCode.NOT_FOUND.value


@pytest.mark.asyncio
async def test_probe_uses_ffprobe_when_available(audio_file) -> None:
    ffprobe = FakeFFProbe(data=probe_payload())
    prober = MetadataProber(ffprobe, AVAILABLE)

    res = await prober.probe(str(audio_file))

    assert res.ok
    assert res.meta["source"] == "ffprobe"
    assert res.data.duration == 10.0
    assert res.data.format == "mp3"
    assert res.data.file_size == 2000
    assert ffprobe.calls == [str(audio_file)]


@pytest.mark.asyncio
async def test_probe_missing_file_never_invokes_ffprobe(tmp_path) -> None:
    ffprobe = FakeFFProbe(data=probe_payload())
    prober = MetadataProber(ffprobe, AVAILABLE)

    res = await prober.probe(str(tmp_path / "ghost.wav"))

    assert not res.ok
    assert res.code == ErrorCode.NOT_FOUND.value
    assert ffprobe.calls == []


@pytest.mark.asyncio
async def test_probe_estimates_when_decoder_unavailable(tmp_path) -> None:
    path = tmp_path / "jingle.wav"
    path.write_bytes(b"\x00" * 1_764_000)
    ffprobe = FakeFFProbe(data=probe_payload())
    prober = MetadataProber(ffprobe, DecoderAvailability.unavailable("ffmpeg not found"))

    res = await prober.probe(str(path))

    assert res.ok
    assert res.meta["source"] == "estimate"
    assert res.meta["fallback_reason"] == ErrorCode.TOOL_MISSING.value
    assert res.data.duration == 30.0
    assert res.data.sample_rate == 44100
    assert res.data.channels == 2
    assert ffprobe.calls == []


@pytest.mark.asyncio
async def test_probe_error_falls_back_to_estimate(audio_file) -> None:
    prober = MetadataProber(FakeFFProbe(error_code=ErrorCode.FFPROBE_ERROR.value), AVAILABLE)

    res = await prober.probe(str(audio_file))

    assert res.ok
    assert res.meta["source"] == "estimate"
    assert res.meta["fallback_reason"] == ErrorCode.FFPROBE_ERROR.value
    # 2000 bytes of mp3 -> well under the 30s floor
    assert res.data.duration == 30.0
    assert res.data.bit_rate is None


@pytest.mark.asyncio
async def test_probe_without_audio_stream_falls_back(audio_file) -> None:
    data = {"format": {"duration": "4"}, "streams": [{"codec_type": "video"}], "audio_stream": {}}
    prober = MetadataProber(FakeFFProbe(data=data), AVAILABLE)

    res = await prober.probe(str(audio_file))

    assert res.ok
    assert res.meta["fallback_reason"] == ErrorCode.NO_AUDIO_STREAM.value


def test_metadata_from_probe_rejects_non_positive_fields() -> None:
    payload = probe_payload(sample_rate="-1", channels=-2, bit_rate="-64000")

    meta = metadata_from_probe(payload, "mp3", 10).data

    assert meta.sample_rate == 44100
    assert meta.channels == 2
    assert meta.bit_rate == 0
