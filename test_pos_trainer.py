import io
import random
import unittest
from contextlib import redirect_stdout
from unittest import mock

import pos_trainer
from averaged_perceptron import AveragedPerceptron
from pos_features import START
from pos_trainer import train, train_epoch, validate_sentences


TRAIN = [
    (["The", "dog", "barks", "."], ["DT", "NN", "VBZ", "."]),
    (["A", "cat", "sleeps", "."], ["DT", "NN", "VBZ", "."]),
    (["Dogs", "chase", "the", "cat", "."], ["NNS", "VBP", "DT", "NN", "."]),
    (["The", "old", "dog", "runs", "in", "1999", "."], ["DT", "JJ", "NN", "VBZ", "IN", "CD", "."]),
    (["Cats", "like", "well-known", "dogs", "."], ["NNS", "VBP", "JJ", "NNS", "."]),
    (["I", "saw", "42", "birds", "."], ["PRP", "VBD", "CD", "NNS", "."]),
]


class TestValidate(unittest.TestCase):
    def test_mismatched_lengths_raise(self):
        with self.assertRaises(ValueError) as ctx:
            validate_sentences([(["a"], ["X"]), (["a", "b"], ["X"])])
        self.assertIn("sentence 1", str(ctx.exception))

    def test_returns_lists(self):
        self.assertEqual(validate_sentences([(("a", "b"), ("X", "Y"))]),
                         [(["a", "b"], ["X", "Y"])])


class TestTrain(unittest.TestCase):
    def test_tag_book_example(self):
        for seed in (0, 1, 2):
            tagger = train([(["the", "dog", "barks"], ["DET", "NOUN", "VERB"])],
                           num_iterations=1, frequency_threshold=0, seed=seed, verbose=False)
            self.assertEqual(tagger.tag(["the dog barks"]),
                             [[("the", "DET"), ("dog", "NOUN"), ("barks", "VERB")]])

    def test_mismatched_sentence_fails_whole_call(self):
        bad = TRAIN + [(["one", "two"], ["CD"])]
        with self.assertRaises(ValueError):
            train(bad, verbose=False)

    def test_same_seed_same_weights(self):
        first = train(TRAIN, num_iterations=4, seed=11, verbose=False)
        second = train(TRAIN, num_iterations=4, seed=11, verbose=False)
        self.assertEqual(first.model.weights, second.model.weights)
        self.assertEqual(first.tag_book, second.tag_book)

    def test_rng_instance_matches_seed(self):
        first = train(TRAIN, num_iterations=3, seed=5, verbose=False)
        second = train(TRAIN, num_iterations=3, rng=random.Random(5), verbose=False)
        self.assertEqual(first.model.weights, second.model.weights)

    def test_input_is_not_reordered(self):
        sentences = list(TRAIN)
        train(sentences, num_iterations=3, seed=3, verbose=False)
        self.assertEqual(sentences, TRAIN)

    def test_classes_and_averaged_model(self):
        tagger = train(TRAIN, num_iterations=2, seed=1, verbose=False)
        self.assertEqual(tagger.classes, {tag for _, tags in TRAIN for tag in tags})
        self.assertTrue(tagger.model.averaged)
        with self.assertRaises(RuntimeError):
            tagger.model.update("DT", "NN", {"bias": 1})

    def test_learns_training_data(self):
        tagger = train(TRAIN, num_iterations=10, seed=2, verbose=False)
        output = tagger.tag([" ".join(words) for words, _ in TRAIN])

        correct = 0
        total = 0
        for (words, tags), tagged in zip(TRAIN, output):
            self.assertEqual([word for word, _ in tagged], words)
            correct += sum(1 for gold, (_, pred) in zip(tags, tagged) if gold == pred)
            total += len(tags)
        self.assertGreater(correct / total, 0.8)

    def test_carry_history(self):
        tagger = train(TRAIN, num_iterations=2, seed=4, reset_history=False, verbose=False)
        self.assertFalse(tagger.reset_history)
        self.assertEqual(len(tagger.tag(["The dog barks ."])[0]), 4)

    def test_empty_corpus(self):
        tagger = train([], verbose=False)
        self.assertEqual(tagger.classes, set())
        self.assertEqual(tagger.tag([]), [])
        self.assertEqual(tagger.tag(["hello"]), [[("hello", None)]])

    def test_zero_iterations(self):
        tagger = train(TRAIN, num_iterations=0, verbose=False)
        self.assertTrue(tagger.model.averaged)
        self.assertEqual(tagger.model.weights, {})

    def test_verbose_prints_progress(self):
        out = io.StringIO()
        with redirect_stdout(out):
            train(TRAIN, num_iterations=2, seed=0)
        self.assertIn("Iteration 2/2", out.getvalue())
        self.assertIn("Training completed.", out.getvalue())


class InOrder:
    """Stands in for random.Random and leaves the order alone."""

    def shuffle(self, items):
        pass


class TestTrainEpoch(unittest.TestCase):
    SENTENCES = [(["a"], ["X"]), (["b"], ["Y"])]

    def run_epochs(self, reset_history, epochs=1):
        """Train on SENTENCES and record (word, prev, prev2) for every token."""
        model = AveragedPerceptron(["X", "Y"])
        seen = []
        real_get_features = pos_trainer.get_features

        def recording_get_features(i, word, context, prev, prev2):
            seen.append((word, prev, prev2))
            return real_get_features(i, word, context, prev, prev2)

        with mock.patch.object(pos_trainer, "get_features", recording_get_features):
            for _ in range(epochs):
                train_epoch(model, {}, self.SENTENCES, InOrder(), reset_history)
        return model, seen

    def test_history_resets_per_sentence(self):
        model, seen = self.run_epochs(reset_history=True)
        self.assertEqual(seen, [("a",) + tuple(START), ("b",) + tuple(START)])
        self.assertNotIn("i-1 tag Y", model.weights)

    def test_history_carries_wrong_guess_into_next_sentence(self):
        model, seen = self.run_epochs(reset_history=False)
        # The empty model guesses Y for "a" (gold X) and that guess is carried
        self.assertEqual(seen, [("a",) + tuple(START), ("b", "Y", START[0])])
        self.assertIn("i-1 tag Y", model.weights)

    def test_history_resets_at_epoch_start(self):
        _, seen = self.run_epochs(reset_history=False, epochs=2)
        self.assertEqual(len(seen), 4)
        self.assertEqual(seen[2], ("a",) + tuple(START))

    def test_epoch_counts(self):
        model = AveragedPerceptron(["X", "Y"])
        counts = train_epoch(model, {"b": "Y"}, self.SENTENCES, InOrder())
        # "a" is classified (wrongly), "b" comes from the tag book
        self.assertEqual(counts, (1, 1, 1))
        self.assertEqual(model.i, 1)


if __name__ == '__main__':
    unittest.main()
