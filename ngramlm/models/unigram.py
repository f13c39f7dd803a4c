"""Maximum-likelihood unigram language model."""

import logging
from collections import Counter
from typing import List, Optional, Set

import torch

from ngramlm.config import END_TOKEN, MAX_DRAWS, START_TOKEN
from ngramlm.data.corpus import iter_lines, normalize, split_tokens
from ngramlm.models.distribution import (
    ProbTable,
    clamp_probability,
    inverse_cdf,
    perplexity_from_probs,
    ratio,
    sort_table,
    uniform,
)


logger = logging.getLogger(__name__)


class UnigramModel:
    """Unigram model over space-separated tokens with sentence markers.

    Every non-empty line contributes one ``<s>`` and one ``</s>`` count in
    addition to its tokens. Probabilities are raw relative frequencies, so
    tokens never seen in training score 0.
    """

    def __init__(self, corpus: str, vocab: Set[str], counts: Counter, corpus_len: int):
        """
        Args:
            corpus: Normalized training text
            vocab: All tokens seen in training, including both markers
            counts: Token occurrence counts
            corpus_len: Sum of all counts
        """
        self.corpus = corpus
        self.vocab = vocab
        self.counts = counts
        self.corpus_len = corpus_len

        tokens = sorted(self.vocab)
        probs = torch.tensor([self.probability(w) for w in tokens], dtype=torch.float64)
        self.probs: ProbTable = sort_table(tokens, probs)

    @classmethod
    def train(cls, text: str) -> 'UnigramModel':
        """Build a model from raw corpus text."""
        corpus = normalize(text)
        vocab = {START_TOKEN, END_TOKEN}
        counts = Counter({START_TOKEN: 0, END_TOKEN: 0})
        corpus_len = 0
        n_lines = 0

        for line in iter_lines(corpus):
            n_lines += 1
            counts[START_TOKEN] += 1
            counts[END_TOKEN] += 1
            corpus_len += 2
            for word in split_tokens(line):
                vocab.add(word)
                counts[word] += 1
                corpus_len += 1

        logger.info(f"Unigram model: {n_lines} lines, {corpus_len} tokens, vocab {len(vocab)}")
        return cls(corpus, vocab, counts, corpus_len)

    def probability(self, token: str) -> float:
        """P(token); 0 for unseen tokens, NaN for an empty corpus."""
        return clamp_probability(ratio(self.counts.get(token, 0), self.corpus_len))

    def sample_sentence(
        self,
        generator: Optional[torch.Generator] = None,
        max_draws: int = MAX_DRAWS,
    ) -> str:
        """Sample a sentence, one independent draw per word.

        A drawn ``<s>`` is passed over in favour of the next candidate. The
        sentence ends when ``</s>`` is drawn, or is closed with ``</s>``
        after ``max_draws`` draws.
        """
        if max_draws < 0:
            raise ValueError(f"max_draws must be non-negative, got {max_draws}")

        words: List[str] = [START_TOKEN]
        for _ in range(max_draws):
            token = inverse_cdf(self.probs, uniform(generator), skip=START_TOKEN)
            if token is None:
                continue
            words.append(token)
            if token == END_TOKEN:
                return ' '.join(words)

        words.append(END_TOKEN)
        return ' '.join(words)

    def perplexity(self, text: str) -> float:
        """Perplexity of held-out text, each line scored as ``<s> line </s>``."""
        probs = []
        for line in iter_lines(normalize(text)):
            for word in split_tokens(f"{START_TOKEN} {line} {END_TOKEN}"):
                probs.append(self.probability(word))
        return perplexity_from_probs(probs)

    def __repr__(self) -> str:
        return f"UnigramModel(vocab={len(self.vocab)}, corpus_len={self.corpus_len})"
