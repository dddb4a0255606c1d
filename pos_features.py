from collections import defaultdict


START = ["-START-", "-START2-"]
END = ["-END-", "-END2-"]

HYPHEN = "!HYPEN"
YEAR = "!YEAR"
DIGITS = "!DIGITS"

# Word classes that normalize() hands back untouched
RESERVED = {HYPHEN, YEAR, DIGITS}


def normalize(word):
    """
    Map a word to the form used in the context window.
    - Hyphenated words (hyphen not leading) become !HYPEN
    - Four digit numbers become !YEAR
    - Anything else starting with a digit becomes !DIGITS
    - Everything else is lower cased
    """
    if word in RESERVED:
        return word
    if "-" in word and word[0] != "-":
        return HYPHEN
    if len(word) == 4 and word.isdigit():
        return YEAR
    if word and word[0].isdigit():
        return DIGITS
    return word.lower()


def build_context(words):
    """
    Pad the normalized words with two start and two end markers.
    Position i of the sentence lives at index i + 2.
    """
    return START + [normalize(word) for word in words] + END


def get_features(i, word, context, prev, prev2):
    """
    Extract the local features of the word at sentence position i.

    word is the raw token (suffix and first character features use its
    original case), context is the padded window from build_context(),
    prev and prev2 are the two previously assigned tags.

    Returns a {feature name: count} mapping that defaults to 0.
    """
    features = defaultdict(int)

    def add(name, *args):
        features[" ".join((name,) + args)] += 1

    i += len(START)
    # Constant feature, acts as a class prior
    add("bias")
    add("i suffix", word[-3:])
    add("i pref1", word[:1])
    add("i-1 tag", prev)
    add("i-2 tag", prev2)
    add("i tag+i-2 tag", prev, prev2)
    add("i word", context[i])
    add("i-1 tag+i word", prev, context[i])
    add("i-1 word", context[i - 1])
    add("i-1 suffix", context[i - 1][-3:])
    add("i-2 word", context[i - 2])
    add("i+1 word", context[i + 1])
    add("i+1 suffix", context[i + 1][-3:])
    add("i+2 word", context[i + 2])
    return features
