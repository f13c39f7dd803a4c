"""Helpers for training both models and summarising them."""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Union

import torch

from ngramlm.models.bigram import BigramModel
from ngramlm.models.unigram import UnigramModel


logger = logging.getLogger(__name__)

LanguageModel = Union[UnigramModel, BigramModel]

MODEL_TYPES = {
    'unigram': UnigramModel,
    'bigram': BigramModel,
}


@dataclass
class ModelReport:
    """One sampled sentence and one perplexity for a trained model."""
    name: str
    sentence: str
    perplexity: float


def train_model(name: str, text: str) -> LanguageModel:
    """Train the model registered under ``name`` on ``text``."""
    try:
        model_cls = MODEL_TYPES[name]
    except KeyError:
        raise ValueError(f"Unknown model type: {name!r}") from None
    return model_cls.train(text)


def score(model: LanguageModel, text: str) -> float:
    """Perplexity of ``text`` under ``model``, warning when it is degenerate."""
    pp = model.perplexity(text)
    if math.isinf(pp) or math.isnan(pp):
        logger.warning(f"{type(model).__name__} perplexity is {pp}; held-out text has zero-probability tokens")
    return pp


def build_report(
    text: str,
    held_out: Optional[str] = None,
    generator: Optional[torch.Generator] = None,
) -> List[ModelReport]:
    """Train unigram and bigram models on ``text`` and report on each.

    Perplexity is measured on ``held_out`` when given, otherwise on the
    training text itself.
    """
    eval_text = text if held_out is None else held_out
    reports = []
    for name in MODEL_TYPES:
        model = train_model(name, text)
        sentence = model.sample_sentence(generator=generator)
        reports.append(ModelReport(name, sentence, score(model, eval_text)))
        logger.debug(f"{name}: {sentence}")
    return reports
