import random
import time

from averaged_perceptron import AveragedPerceptron
from perceptron_tagger import PerceptronTagger
from pos_features import START, build_context, get_features
from tag_book import build_tag_book


def validate_sentences(tagged_sentences):
    """
    Check that every (words, tags) pair is aligned and return them as lists.
    Raises ValueError on the first sentence whose lengths differ.
    """
    sentences = []
    for idx, (words, tags) in enumerate(tagged_sentences):
        words, tags = list(words), list(tags)
        if len(words) != len(tags):
            raise ValueError(
                f"Training sentence {idx} has {len(words)} words but {len(tags)} tags")
        sentences.append((words, tags))
    return sentences


def train_epoch(model, tag_book, sentences, rng, reset_history=True):
    """
    One shuffled online pass over the training sentences.
    Returns (mistakes, classified tokens, tag book hits).
    """
    num_mistakes = 0
    num_classified = 0
    num_book = 0

    indices = list(range(len(sentences)))
    rng.shuffle(indices)

    prev, prev2 = START
    for idx in indices:
        words, gold_tags = sentences[idx]
        if reset_history:
            prev, prev2 = START
        context = build_context(words)

        for i, word in enumerate(words):
            guess = tag_book.get(word.lower())
            if guess is None:
                features = get_features(i, word, context, prev, prev2)
                guess = model.predict(features)
                model.update(gold_tags[i], guess, features)
                num_classified += 1
                if guess != gold_tags[i]:
                    num_mistakes += 1
            else:
                num_book += 1

            # The history follows the tag that was used, right or wrong
            prev2 = prev
            prev = guess

    return num_mistakes, num_classified, num_book


def train(tagged_sentences, num_iterations=5, frequency_threshold=20,
          ambiguity_threshold=0.97, seed=None, rng=None, reset_history=True,
          verbose=True):
    """
    Train a part-of-speech tagger from (words, tags) pairs.

    The tag book and the class set come from the whole corpus, then
    num_iterations shuffled epochs of perceptron updates run, and the weights
    are finally averaged. Pass seed (or a random.Random as rng) for
    reproducible shuffling.

    Returns a PerceptronTagger holding the averaged model.
    """
    sentences = validate_sentences(tagged_sentences)
    if rng is None:
        rng = random.Random(seed)

    tag_book = build_tag_book(sentences, frequency_threshold, ambiguity_threshold)
    classes = {tag for _, tags in sentences for tag in tags}
    model = AveragedPerceptron(classes)

    if verbose:
        print(f"Training averaged perceptron for {num_iterations} iterations...")
        print(f"  Sentences: {len(sentences)}, tags: {len(classes)}, "
              f"tag book entries: {len(tag_book)}")

    for iteration in range(num_iterations):
        start_time = time.time()
        num_mistakes, num_classified, num_book = train_epoch(
            model, tag_book, sentences, rng, reset_history)

        if verbose:
            elapsed = time.time() - start_time
            mistake_rate = num_mistakes / num_classified if num_classified > 0 else 0
            print(f"Iteration {iteration+1}/{num_iterations}")
            print(f"  Mistakes: {num_mistakes}/{num_classified} ({mistake_rate:.2%})")
            print(f"  Tag book hits: {num_book}")
            print(f"  Time: {elapsed:.2f} seconds")

    if verbose:
        print("Averaging weights...")
    model.average_weights()

    if verbose:
        print("Training completed.")
        print(f"Final model: {len(model.weights)} features")

    return PerceptronTagger(model, tag_book, reset_history=reset_history)
