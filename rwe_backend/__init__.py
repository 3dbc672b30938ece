"""
Radio waveform engine backend.

Audio metadata probing and waveform extraction behind an aiohttp API.
"""
