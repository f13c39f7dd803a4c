"""Shared constants for ngramlm."""

# Sentinel tokens; they appear literally in sampled sentences.
START_TOKEN = '<s>'
END_TOKEN = '</s>'

# Upper bound on draws per sampled sentence.
MAX_DRAWS = 100

# Characters removed by normalization. No other punctuation is touched.
STRIPPED_PUNCTUATION = ('.', ',', '"', "'", '?', '!')

# Denominator used for a bigram context with no recorded total.
MISSING_CONTEXT_TOTAL = 10_000_000_000

DEFAULT_CORPUS_PATH = 'thor.txt'
