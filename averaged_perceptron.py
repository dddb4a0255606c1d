from collections import defaultdict


class AveragedPerceptron:
    """
    Multi-class averaged perceptron over sparse string features.

    weights maps feature -> {class: weight}; missing entries count as 0.
    While training, every weight change is preceded by folding the value it
    held since its last change into a running total, so that the time average
    can be computed at the end without touching every weight on every step.
    """

    def __init__(self, classes=(), weights=None):
        self.classes = set(classes)
        self.weights = weights if weights is not None else {}
        self.averaged = False
        # Number of update() calls so far
        self.i = 0
        self._totals = defaultdict(float)
        self._tstamps = defaultdict(int)

    def score(self, features):
        """
        Dot-product the features with the weights of every class.
        """
        scores = defaultdict(float)
        for feat, value in features.items():
            if feat not in self.weights or value == 0:
                continue
            for label, weight in self.weights[feat].items():
                scores[label] += value * weight
        return scores

    def predict(self, features):
        """Return the best scoring class, or None when no class is known."""
        if not self.classes:
            return None
        scores = self.score(features)
        # Secondary sort on the label keeps ties stable
        return max(self.classes, key=lambda label: (scores[label], label))

    def update(self, truth, guess, features):
        """
        Advance the step counter and, on a mistake, reward the true class and
        penalise the guessed one for every active feature.
        """
        if self.averaged:
            raise RuntimeError("Cannot update a perceptron whose weights have been averaged")
        self.i += 1
        if truth == guess:
            return
        for feat, count in features.items():
            if count == 0:
                continue
            weights = self.weights.setdefault(feat, {})
            self._update_feature(feat, truth, weights, count)
            self._update_feature(feat, guess, weights, -count)

    def _update_feature(self, feat, label, weights, value):
        key = (feat, label)
        weight = weights.get(label, 0)
        self._totals[key] += (self.i - self._tstamps[key]) * weight
        self._tstamps[key] = self.i
        weights[label] = weight + value

    def average_weights(self):
        """
        Replace every weight by its average over all update steps.
        Averages are rounded to 3 decimals. The model is read-only afterwards.
        """
        if self.averaged:
            raise RuntimeError("Weights have already been averaged")
        for feat, weights in self.weights.items():
            new_weights = {}
            for label, weight in weights.items():
                key = (feat, label)
                total = self._totals[key] + (self.i - self._tstamps[key]) * weight
                new_weights[label] = round(total / self.i, 3) if self.i else 0.0
            self.weights[feat] = new_weights
        self._totals.clear()
        self._tstamps.clear()
        self.averaged = True
