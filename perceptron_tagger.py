import multiprocessing
import pickle
from concurrent.futures import ProcessPoolExecutor

from averaged_perceptron import AveragedPerceptron
from pos_features import START, build_context, get_features


def tokenize(sentence):
    """Split a raw sentence on whitespace."""
    return sentence.split()


class PerceptronTagger:
    """
    Greedy left-to-right part-of-speech tagger backed by an averaged perceptron.

    Each token is looked up in the tag book first; only words missing from the
    book are classified. The two previously assigned tags feed the features of
    the next token.
    """

    def __init__(self, model, tag_book, reset_history=True):
        if not model.averaged:
            raise ValueError("PerceptronTagger needs a model with averaged weights")
        self.model = model
        self.tag_book = tag_book
        self.reset_history = reset_history

    @property
    def classes(self):
        return self.model.classes

    def tag_words(self, words, prev=START[0], prev2=START[1]):
        """
        Tag one tokenized sentence starting from the given tag history.
        Returns the list of (word, tag) pairs and the final (prev, prev2).
        """
        context = build_context(words)
        tagged = []
        for i, word in enumerate(words):
            tag = self.tag_book.get(word.lower())
            if tag is None:
                features = get_features(i, word, context, prev, prev2)
                tag = self.model.predict(features)
            tagged.append((word, tag))
            prev2 = prev
            prev = tag
        return tagged, (prev, prev2)

    def tag(self, sentences, tokenizer=tokenize):
        """
        Tag raw sentences. Returns one list of (word, tag) pairs per sentence.

        With reset_history=False the tag history runs on across sentence
        boundaries within this call.
        """
        prev, prev2 = START
        output = []
        for sentence in sentences:
            if self.reset_history:
                prev, prev2 = START
            tagged, (prev, prev2) = self.tag_words(tokenizer(sentence), prev, prev2)
            output.append(tagged)
        return output

    def tag_parallel(self, sentences, num_processes=None, tokenizer=tokenize):
        """
        Tag raw sentences in worker processes. The history is always reset
        per sentence here since chunks are tagged independently.
        """
        if num_processes is None:
            num_processes = max(1, multiprocessing.cpu_count() - 1)

        # Keep track of original indices
        tokenized = [(i, tokenizer(sentence)) for i, sentence in enumerate(sentences)]

        chunks = [[] for _ in range(num_processes)]
        for i, item in enumerate(tokenized):
            chunks[i % num_processes].append(item)

        results = []
        with ProcessPoolExecutor(max_workers=num_processes) as executor:
            futures = [executor.submit(self._tag_chunk, chunk) for chunk in chunks if chunk]
            for future in futures:
                results.extend(future.result())

        # Sort results by original index
        results.sort(key=lambda x: x[0])
        return [r[1] for r in results]

    def _tag_chunk(self, chunk):
        """Tag a chunk of (index, words) items."""
        results = []
        for idx, words in chunk:
            tagged, _ = self.tag_words(words)
            results.append((idx, tagged))
        return results

    def save(self, path):
        """Pickle the weights, tag book and classes to path."""
        with open(path, 'wb') as f:
            pickle.dump((self.model.weights, self.tag_book, self.model.classes), f)

    @classmethod
    def load(cls, path, reset_history=True):
        """Load a tagger written by save()."""
        with open(path, 'rb') as f:
            weights, tag_book, classes = pickle.load(f)
        model = AveragedPerceptron(classes, weights)
        model.averaged = True
        return cls(model, tag_book, reset_history=reset_history)
