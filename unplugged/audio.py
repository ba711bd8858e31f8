import sys
import math
import struct
import logging
import threading

from .config import CHIME_NOTES_HZ, CHIME_NOTE_SEC, CHIME_VOLUME, SAMPLE_RATE
from .logging_setup import get_logger


def _wrap_wav_header(pcm_data: bytes, sample_rate: int) -> bytes:
    data_size = len(pcm_data)
    header = struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        16,
        1,
        1,
        sample_rate,
        sample_rate * 2,
        2,
        16,
        b"data",
        data_size,
    )
    return header + pcm_data


def generate_chime_wav_bytes(
    notes_hz=CHIME_NOTES_HZ,
    note_sec: float = CHIME_NOTE_SEC,
    volume: float = CHIME_VOLUME,
    sample_rate: int = SAMPLE_RATE,
) -> bytes:
    volume = max(0.0, min(1.0, float(volume)))
    max_amp = int(32767 * volume)
    n_samples = max(1, int(sample_rate * note_sec))

    frames = bytearray()
    for freq in notes_hz:
        for i in range(n_samples):
            t = i / sample_rate
            # linear fade so consecutive notes don't click
            envelope = 1.0 - (i / n_samples)
            frames += struct.pack("<h", int(max_amp * envelope * math.sin(2.0 * math.pi * freq * t)))

    return _wrap_wav_header(bytes(frames), sample_rate)


def play_alert_chime(logger: logging.Logger | None = None) -> None:
    if sys.platform != "win32":
        get_logger(logger).debug("Alert chime skipped: winsound is Windows only")
        return

    wav_data = generate_chime_wav_bytes()

    def _play():
        import winsound

        winsound.PlaySound(wav_data, winsound.SND_MEMORY)

    threading.Thread(target=_play, name="alert-chime", daemon=True).start()
