"""Maximum-likelihood bigram language model."""

import logging
from collections import Counter, defaultdict
from typing import Dict, List, Optional, Set

import torch

from ngramlm.config import END_TOKEN, MAX_DRAWS, MISSING_CONTEXT_TOTAL, START_TOKEN
from ngramlm.data.corpus import iter_lines, normalize, split_tokens
from ngramlm.models.distribution import (
    ProbTable,
    clamp_probability,
    inverse_cdf,
    perplexity_from_probs,
    sort_table,
    uniform,
)


logger = logging.getLogger(__name__)


class BigramModel:
    """Bigram model P(curr | prev) over space-separated tokens.

    Each line is read as ``<s> w0 ... wN </s>``. A sorted conditional table is
    kept for every vocabulary token, which costs vocab-squared memory and
    limits the model to small corpora.
    """

    def __init__(self, corpus: str, vocab: Set[str], counts: Dict[str, Counter], totals: Counter):
        """
        Args:
            corpus: Normalized training text
            vocab: All tokens seen in training, including both markers
            counts: Predecessor -> following token -> count
            totals: Predecessor -> number of transitions out of it
        """
        self.corpus = corpus
        self.vocab = vocab
        self.counts = counts
        self.totals = totals
        self.probs: Dict[str, ProbTable] = self._build_tables()

    @classmethod
    def train(cls, text: str) -> 'BigramModel':
        """Build a model from raw corpus text."""
        corpus = normalize(text)
        vocab = {START_TOKEN, END_TOKEN}
        counts: Dict[str, Counter] = defaultdict(Counter)
        totals: Counter = Counter()

        for line in iter_lines(corpus):
            prev = START_TOKEN
            for curr in split_tokens(f"{line} {END_TOKEN}"):
                vocab.add(curr)
                counts[prev][curr] += 1
                totals[prev] += 1
                prev = curr

        logger.info(f"Bigram model: {len(counts)} contexts, vocab {len(vocab)}")
        return cls(corpus, vocab, dict(counts), totals)

    def _build_tables(self) -> Dict[str, ProbTable]:
        tokens = sorted(self.vocab)
        index = {w: i for i, w in enumerate(tokens)}

        counts = torch.zeros(len(tokens), len(tokens), dtype=torch.float64)
        for prev, following in self.counts.items():
            for curr, c in following.items():
                counts[index[prev], index[curr]] = c

        seen = torch.tensor([w in self.counts for w in tokens])
        denom = torch.tensor(
            [self._context_total(w) for w in tokens], dtype=torch.float64
        )
        probs = torch.where(
            seen.unsqueeze(1), counts / denom.unsqueeze(1), torch.zeros_like(counts)
        ).clamp(0.0, 1.0)

        logger.debug(f"Built {len(tokens)}x{len(tokens)} bigram table")
        return {w: sort_table(tokens, probs[i]) for i, w in enumerate(tokens)}

    def _context_total(self, prev: str) -> int:
        return self.totals.get(prev, 0) or MISSING_CONTEXT_TOTAL

    def probability(self, prev_token: str, curr_token: str) -> float:
        """P(curr_token | prev_token); 0 when prev_token never preceded anything."""
        following = self.counts.get(prev_token)
        if following is None:
            return 0.0
        return clamp_probability(following.get(curr_token, 0) / self._context_total(prev_token))

    def sample_sentence(
        self,
        generator: Optional[torch.Generator] = None,
        max_draws: int = MAX_DRAWS,
    ) -> str:
        """Sample a sentence by walking the chain from ``<s>``.

        The sentence ends when ``</s>`` is drawn, or is closed with ``</s>``
        after ``max_draws`` draws.
        """
        if max_draws < 0:
            raise ValueError(f"max_draws must be non-negative, got {max_draws}")

        words: List[str] = [START_TOKEN]
        prev = START_TOKEN
        for _ in range(max_draws):
            token = inverse_cdf(self.probs[prev], uniform(generator))
            if token is None:
                continue
            words.append(token)
            if token == END_TOKEN:
                return ' '.join(words)
            prev = token

        words.append(END_TOKEN)
        return ' '.join(words)

    def perplexity(self, text: str) -> float:
        """Perplexity of held-out text, each line scored as ``line </s>`` after ``<s>``."""
        probs = []
        for line in iter_lines(normalize(text)):
            prev = START_TOKEN
            for curr in split_tokens(f"{line} {END_TOKEN}"):
                probs.append(self.probability(prev, curr))
                prev = curr
        return perplexity_from_probs(probs)

    def __repr__(self) -> str:
        return f"BigramModel(vocab={len(self.vocab)}, contexts={len(self.counts)})"
