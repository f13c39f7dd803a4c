"""Command-line interface for sampling and scoring n-gram models."""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import torch

from ngramlm.config import DEFAULT_CORPUS_PATH
from ngramlm.data.corpus import read_corpus
from ngramlm.utils.report import MODEL_TYPES, build_report, score, train_model


logger = logging.getLogger(__name__)

SHORT_NAMES = {'unigram': 'uni', 'bigram': 'bi'}


def setup_logging(level=logging.INFO):
    """Configure logging."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def make_generator(seed: Optional[int]) -> Optional[torch.Generator]:
    """Return a seeded generator, or None to use torch's default one."""
    if seed is None:
        return None
    return torch.Generator().manual_seed(seed)


def report(args, text: str):
    """Print one sentence and one perplexity per model."""
    held_out = read_corpus(args.eval) if args.eval else None
    reports = build_report(text, held_out, generator=make_generator(args.seed))

    for r in reports:
        print(f"{r.name}: {r.sentence}")
    print()
    for r in reports:
        print(f"{SHORT_NAMES[r.name]} pp: {r.perplexity}")


def sample(args, text: str):
    """Print sampled sentences from one model."""
    model = train_model(args.model, text)
    generator = make_generator(args.seed)
    for _ in range(args.num):
        print(model.sample_sentence(generator=generator))


def perplexity(args, text: str):
    """Print perplexity of the evaluation text under the chosen model(s)."""
    eval_text = read_corpus(args.eval) if args.eval else text
    names = list(MODEL_TYPES) if args.model == 'both' else [args.model]
    for name in names:
        model = train_model(name, text)
        print(f"{SHORT_NAMES[name]} pp: {score(model, eval_text)}")


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Train unigram and bigram models, sample sentences and measure perplexity'
    )
    parser.add_argument(
        '--data',
        type=Path,
        default=Path(DEFAULT_CORPUS_PATH),
        help='Training corpus file'
    )
    parser.add_argument(
        '--seed',
        type=int,
        help='Random seed for sampling'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    report_parser = subparsers.add_parser('report')
    report_parser.add_argument('--eval', type=Path, help='Held-out text (defaults to the training corpus)')

    sample_parser = subparsers.add_parser('sample')
    sample_parser.add_argument('--model', choices=list(MODEL_TYPES), default='bigram')
    sample_parser.add_argument('--num', type=int, default=1)

    pp_parser = subparsers.add_parser('perplexity')
    pp_parser.add_argument('--model', choices=list(MODEL_TYPES) + ['both'], default='both')
    pp_parser.add_argument('--eval', type=Path, help='Held-out text (defaults to the training corpus)')

    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if not args.data.is_file():
        parser.error(f"corpus file not found: {args.data}")
    if getattr(args, 'eval', None) is not None and not args.eval.is_file():
        parser.error(f"evaluation file not found: {args.eval}")

    text = read_corpus(args.data)
    logger.info(f"Read {len(text)} characters from {args.data}")

    if args.command == 'report':
        report(args, text)
    elif args.command == 'sample':
        sample(args, text)
    else:
        perplexity(args, text)


if __name__ == '__main__':
    main()
