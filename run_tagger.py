#!/usr/bin/env python3
"""
Averaged perceptron part-of-speech tagger.

Train a model from a labeled corpus (word and tag per line, blank line between
sentences), save or load it, tag an unlabeled corpus (one word per line) and
measure token accuracy against a labeled file.
"""

import argparse
import sys
import time

from perceptron_tagger import PerceptronTagger
from pos_corpus import evaluate, read_data, read_unlabeled_data, split_words_tags, write_output
from pos_trainer import train


def build_parser():
    parser = argparse.ArgumentParser(description="Averaged perceptron POS tagger")
    parser.add_argument('--train', metavar='PATH',
                        help="Labeled corpus to train on")
    parser.add_argument('--model', metavar='PATH',
                        help="Where to save the trained model, or the model to load "
                        "when --train is not given")
    parser.add_argument('--tag', metavar='PATH',
                        help="Unlabeled corpus to tag")
    parser.add_argument('--output', metavar='PATH',
                        help="Where to write the tagged corpus (default: stdout)")
    parser.add_argument('--gold', metavar='PATH',
                        help="Labeled corpus to evaluate the model on")
    parser.add_argument('--iterations', type=int, default=5,
                        help="Number of training epochs")
    parser.add_argument('--seed', type=int, default=None,
                        help="Seed for shuffling the training data")
    parser.add_argument('--frequency-threshold', type=int, default=20,
                        help="Minimum word count for a tag book entry")
    parser.add_argument('--ambiguity-threshold', type=float, default=0.97,
                        help="Minimum share of the most frequent tag for a tag book entry")
    parser.add_argument('--carry-history', action='store_true',
                        help="Do not reset the tag history between sentences")
    parser.add_argument('--parallel', action='store_true',
                        help="Tag with one worker process per CPU")
    parser.add_argument('--quiet', action='store_true',
                        help="Do not print training progress")
    return parser


def tag_sentences(tagger, sentences, parallel=False):
    """Tag already tokenized sentences and return their tag lists."""
    if parallel:
        tagged = tagger.tag_parallel(sentences, tokenizer=list)
    else:
        tagged = tagger.tag(sentences, tokenizer=list)
    return [[tag for _, tag in sentence] for sentence in tagged]


def main(argv=None):
    """Main function to run the tagger."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.train and not args.model:
        parser.error("one of --train or --model is required")
    if not args.train and not (args.tag or args.gold):
        parser.error("nothing to do: give --tag or --gold")

    try:
        if args.train:
            print(f"Reading training data from {args.train}...")
            train_sentences = split_words_tags(read_data(args.train))
            tagger = train(train_sentences,
                           num_iterations=args.iterations,
                           frequency_threshold=args.frequency_threshold,
                           ambiguity_threshold=args.ambiguity_threshold,
                           seed=args.seed,
                           reset_history=not args.carry_history,
                           verbose=not args.quiet)
            if args.model:
                tagger.save(args.model)
                print(f"Model written to {args.model}")
        else:
            print(f"Loading model from {args.model}...")
            tagger = PerceptronTagger.load(args.model, reset_history=not args.carry_history)

        if args.tag:
            print(f"Reading data to tag from {args.tag}...")
            sentences = read_unlabeled_data(args.tag)
            start_time = time.time()
            predictions = tag_sentences(tagger, sentences, args.parallel)
            print(f"Tagged {len(sentences)} sentences in {time.time() - start_time:.2f} seconds")
            if args.output:
                write_output(args.output, sentences, predictions)
                print(f"Predictions written to {args.output}")
            else:
                for words, tags in zip(sentences, predictions):
                    print(" ".join(f"{word}/{tag}" for word, tag in zip(words, tags)))

        if args.gold:
            print(f"Reading gold data from {args.gold}...")
            gold = split_words_tags(read_data(args.gold))
            predictions = tag_sentences(tagger, [words for words, _ in gold], args.parallel)
            correct, total, accuracy = evaluate([tags for _, tags in gold], predictions)
            print(f"Accuracy: {correct}/{total} ({accuracy:.2%})")
    except FileNotFoundError as e:
        print(f"File not found: {e.filename}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
