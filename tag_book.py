from collections import Counter, defaultdict


def count_word_tags(tagged_sentences):
    """
    Count how often each lower cased word carries each tag.
    tagged_sentences is a list of (words, tags) pairs.
    Tags keep the order in which they were first seen for a word.
    """
    word_tag_count = defaultdict(Counter)
    for words, tags in tagged_sentences:
        for word, tag in zip(words, tags):
            word_tag_count[word.lower()][tag] += 1
    return word_tag_count


def build_tag_book(tagged_sentences, frequency_threshold=20, ambiguity_threshold=0.97):
    """
    Find frequent words that (almost) always carry the same tag.

    A word goes into the book with its most frequent tag when it occurs at
    least frequency_threshold times and that tag covers at least
    ambiguity_threshold of its occurrences. Ties for the most frequent tag
    go to the tag seen first in the corpus.
    """
    tag_book = {}
    for word, tag_counts in count_word_tags(tagged_sentences).items():
        tag, mode = max(tag_counts.items(), key=lambda item: item[1])
        n = sum(tag_counts.values())
        if n >= frequency_threshold and mode / n >= ambiguity_threshold:
            tag_book[word] = tag
    return tag_book
