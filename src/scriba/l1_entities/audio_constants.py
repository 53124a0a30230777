"""Audio format constants shared by capture and decoding."""

SAMPLE_RATE = 16000
CHANNELS = 1
