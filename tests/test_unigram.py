import math

import pytest
import torch

from ngramlm.config import END_TOKEN, START_TOKEN
from ngramlm.models.unigram import UnigramModel


def test_counts_include_sentence_markers(corpus):
    model = UnigramModel.train(corpus)
    assert model.corpus == 'the cat sat\nthe dog sat'
    assert model.counts['the'] == 2
    assert model.counts['cat'] == 1
    assert model.counts['sat'] == 2
    assert model.counts['dog'] == 1
    assert model.counts[START_TOKEN] == 2
    assert model.counts[END_TOKEN] == 2
    assert model.corpus_len == 10
    assert model.corpus_len == sum(model.counts.values())


def test_probability(corpus):
    model = UnigramModel.train(corpus)
    assert model.probability('the') == pytest.approx(0.2)
    assert model.probability('sat') == pytest.approx(0.2)
    assert model.probability('cat') == pytest.approx(0.1)
    assert model.probability('fox') == 0.0


def test_probability_lookup_does_not_grow_counts(corpus):
    model = UnigramModel.train(corpus)
    model.probability('fox')
    assert 'fox' not in model.counts


def test_probabilities_sum_to_one(corpus):
    model = UnigramModel.train(corpus + '\nA bird, a plane!\n')
    total = sum(model.probability(w) for w in model.vocab)
    assert total == pytest.approx(1.0)
    assert all(0.0 <= p <= 1.0 for _, p in model.probs)


def test_table_sorted_by_probability_then_token(corpus):
    model = UnigramModel.train(corpus)
    assert model.probs == [
        ('</s>', pytest.approx(0.2)),
        ('<s>', pytest.approx(0.2)),
        ('sat', pytest.approx(0.2)),
        ('the', pytest.approx(0.2)),
        ('cat', pytest.approx(0.1)),
        ('dog', pytest.approx(0.1)),
    ]


def test_consecutive_spaces_give_empty_token():
    model = UnigramModel.train('a  b')
    assert '' in model.vocab
    assert model.counts[''] == 1
    assert model.corpus_len == 5
    assert model.probability('') == pytest.approx(0.2)


def test_empty_corpus():
    model = UnigramModel.train('\n\n')
    assert model.vocab == {START_TOKEN, END_TOKEN}
    assert model.counts[START_TOKEN] == 0
    assert model.counts[END_TOKEN] == 0
    assert model.corpus_len == 0
    assert math.isnan(model.probability('anything'))
    assert math.isnan(model.perplexity('some text'))
    assert model.sample_sentence() == '<s> </s>'


def test_sample_sentence_shape(corpus):
    model = UnigramModel.train(corpus)
    generator = torch.Generator().manual_seed(0)
    for _ in range(50):
        words = model.sample_sentence(generator=generator).split(' ')
        assert words[0] == START_TOKEN
        assert words[-1] == END_TOKEN
        assert START_TOKEN not in words[1:]
        assert END_TOKEN not in words[1:-1]
        assert len(words) <= 102


def test_sample_sentence_respects_draw_cap(corpus):
    model = UnigramModel.train(corpus)
    assert model.sample_sentence(max_draws=0) == '<s> </s>'
    generator = torch.Generator().manual_seed(1)
    for _ in range(20):
        assert len(model.sample_sentence(generator=generator, max_draws=3).split(' ')) <= 5
    with pytest.raises(ValueError):
        model.sample_sentence(max_draws=-1)


def test_sample_sentence_is_reproducible(corpus):
    model = UnigramModel.train(corpus)
    a = [model.sample_sentence(generator=torch.Generator().manual_seed(42)) for _ in range(3)]
    b = [model.sample_sentence(generator=torch.Generator().manual_seed(42)) for _ in range(3)]
    assert a == b


def test_perplexity_on_training_corpus(corpus):
    model = UnigramModel.train(corpus)
    expected = math.exp(-(8 * math.log(0.2) + 2 * math.log(0.1)) / 10)
    pp = model.perplexity(corpus)
    assert pp == pytest.approx(expected)
    assert math.isfinite(pp) and pp >= 1.0


def test_perplexity_with_unseen_word_is_infinite(corpus):
    model = UnigramModel.train(corpus)
    assert math.isinf(model.perplexity('the fox sat'))


def test_perplexity_of_empty_text_is_nan(corpus):
    model = UnigramModel.train(corpus)
    assert math.isnan(model.perplexity(''))
