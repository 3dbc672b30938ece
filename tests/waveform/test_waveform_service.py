import asyncio
import random
import struct

import pytest

from rwe_backend.features.waveform import WaveformService
from rwe_backend.shared import ErrorCode
from tests.fakes import CountingDetector, FakeFFmpeg, FakeFFProbe, probe_payload


def _service(ffmpeg=None, ffprobe=None, detector=None, temp_dir=None, **kwargs) -> WaveformService:
    return WaveformService(
        ffmpeg or FakeFFmpeg(),
        ffprobe or FakeFFProbe(data=probe_payload()),
        detector=detector or CountingDetector(),
        temp_dir=str(temp_dir) if temp_dir else None,
        rng=random.Random(0),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_decoded_waveform(audio_file, temp_dir) -> None:
    raw = struct.pack("<8h", 0, 16384, -32768, 100, 0, 0, 32767, -100)
    svc = _service(ffmpeg=FakeFFmpeg(payload=raw), temp_dir=temp_dir)

    res = await svc.get_waveform(str(audio_file), 4)

    assert res.ok
    wf = res.data
    assert wf.source == "decoded"
    assert res.meta["source"] == "decoded"
    assert res.meta["metadata_source"] == "ffprobe"
    assert list(wf.peaks) == pytest.approx([0.5, 1.0, 0.0, 32767 / 32768])
    assert wf.duration == 10.0
    assert wf.sample_rate == 44100
    assert wf.channels == 2
    assert wf.samples_per_pixel == 110250
    assert res.meta["elapsed_ms"] >= 0.0
    assert list(temp_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_unavailable_decoder_never_spawns_ffmpeg(audio_file, temp_dir) -> None:
    ffmpeg = FakeFFmpeg(payload=b"\x00\x00" * 100)
    ffprobe = FakeFFProbe(data=probe_payload())
    svc = _service(ffmpeg=ffmpeg, ffprobe=ffprobe, detector=CountingDetector(available=False), temp_dir=temp_dir)

    meta = await svc.get_metadata(str(audio_file))
    wf = await svc.get_waveform(str(audio_file), 120)

    assert meta.ok and meta.meta["source"] == "estimate"
    assert wf.ok
    assert wf.data.source == "synthetic"
    assert wf.meta["fallback_reason"] == ErrorCode.TOOL_MISSING.value
    assert wf.data.width == 120
    assert all(0.0 <= p <= 1.0 for p in wf.data.peaks)
    assert wf.data.duration == meta.data.duration
    assert ffmpeg.calls == []
    assert ffprobe.calls == []


@pytest.mark.asyncio
async def test_decode_failure_falls_back_and_cleans_up(audio_file, temp_dir) -> None:
    ffmpeg = FakeFFmpeg(error_code=ErrorCode.FFMPEG_ERROR.value)
    svc = _service(ffmpeg=ffmpeg, temp_dir=temp_dir)

    res = await svc.get_waveform(str(audio_file), 50)

    assert res.ok
    assert res.data.source == "synthetic"
    assert res.meta["fallback_reason"] == ErrorCode.FFMPEG_ERROR.value
    assert res.data.width == 50
    assert len(ffmpeg.calls) == 1
    assert list(temp_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_reduction_error_falls_back(audio_file, temp_dir, monkeypatch) -> None:
    from rwe_backend.features.waveform import service as service_mod

    def _boom(raw, width):
        raise RuntimeError("corrupt buffer")

    monkeypatch.setattr(service_mod, "reduce_to_peaks", _boom)
    svc = _service(ffmpeg=FakeFFmpeg(payload=b"\x00\x01" * 16), temp_dir=temp_dir)

    res = await svc.get_waveform(str(audio_file), 8)

    assert res.ok
    assert res.data.source == "synthetic"
    assert res.meta["fallback_reason"] == ErrorCode.DECODE_FAILED.value


@pytest.mark.asyncio
async def test_missing_file_is_not_found(tmp_path, temp_dir) -> None:
    ffmpeg = FakeFFmpeg(payload=b"\x00\x00")
    ffprobe = FakeFFProbe(data=probe_payload())
    svc = _service(ffmpeg=ffmpeg, ffprobe=ffprobe, temp_dir=temp_dir)
    missing = str(tmp_path / "Evening News.wav")

    meta = await svc.get_metadata(missing)
    wf = await svc.get_waveform(missing, 10)

    assert meta.code == ErrorCode.NOT_FOUND.value
    assert wf.code == ErrorCode.NOT_FOUND.value
    assert ffmpeg.calls == []
    assert ffprobe.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("width", [0, -5, 20001, 2.5, True])
async def test_width_out_of_range_is_rejected(audio_file, width) -> None:
    ffmpeg = FakeFFmpeg(payload=b"\x00\x00")
    svc = _service(ffmpeg=ffmpeg)

    res = await svc.get_waveform(str(audio_file), width)

    assert res.code == ErrorCode.INVALID_INPUT.value
    assert ffmpeg.calls == []


@pytest.mark.asyncio
async def test_default_width(audio_file, temp_dir) -> None:
    svc = _service(ffmpeg=FakeFFmpeg(payload=b"\x00\x01" * 4000), temp_dir=temp_dir)

    res = await svc.get_waveform(str(audio_file))

    assert res.data.width == 800


@pytest.mark.asyncio
async def test_detection_runs_once_under_concurrency(audio_file, temp_dir) -> None:
    detector = CountingDetector()
    svc = _service(ffmpeg=FakeFFmpeg(payload=b"\x00\x01" * 64), detector=detector, temp_dir=temp_dir)

    results = await asyncio.gather(
        *(svc.get_metadata(str(audio_file)) for _ in range(5)),
        *(svc.get_waveform(str(audio_file), 16) for _ in range(5)),
    )

    assert all(r.ok for r in results)
    assert detector.calls == 1
    assert svc.is_initialized
    assert (await svc.initialize()).available is True
    assert detector.calls == 1


@pytest.mark.asyncio
async def test_disabled_decoder_skips_detection(audio_file) -> None:
    detector = CountingDetector()
    svc = _service(detector=detector, decoder_enabled=False)

    availability = await svc.initialize()
    res = await svc.get_waveform(str(audio_file), 32)

    assert availability.available is False
    assert availability.reason == "disabled by configuration"
    assert detector.calls == 0
    assert res.data.source == "synthetic"


@pytest.mark.asyncio
async def test_metadata_serializes_camel_case(audio_file) -> None:
    svc = _service()

    res = await svc.get_metadata(str(audio_file))

    assert res.data.to_dict() == {
        "duration": 10.0,
        "sampleRate": 44100,
        "channels": 2,
        "format": "mp3",
        "fileSize": 2000,
        "bitRate": 128000,
    }


@pytest.mark.asyncio
async def test_default_width_is_capped_by_max_width(audio_file, temp_dir) -> None:
    svc = _service(ffmpeg=FakeFFmpeg(payload=b"\x00\x01" * 4000), temp_dir=temp_dir, max_width=500)

    res = await svc.get_waveform(str(audio_file))

    assert res.ok
    assert res.data.width == 500
