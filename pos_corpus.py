def read_blocks(file_path):
    """
    Yield the non-empty lines of each blank-line separated block in file_path,
    as (line number, stripped line) pairs.
    """
    block = []
    with open(file_path, 'r', encoding='utf-8') as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if line:
                block.append((line_no, line))
            elif block:
                yield block
                block = []
    if block:  # File may not end with an empty line
        yield block


def read_data(file_path):
    """
    Read data from file where each line contains a word and tag separated by
    whitespace, and sentences are separated by empty lines.
    """
    sentences = []
    for block in read_blocks(file_path):
        sentence = []
        for line_no, line in block:
            parts = line.split()
            if len(parts) < 2:
                raise ValueError(
                    f"{file_path}:{line_no}: expected a word and a tag, got {line!r}")
            sentence.append((parts[0], parts[1]))
        sentences.append(sentence)
    return sentences


def read_unlabeled_data(file_path):
    """
    Read unlabeled data where each line holds one token (the whole line,
    spaces included), and sentences are separated by empty lines.
    """
    return [[line for _, line in block] for block in read_blocks(file_path)]


def split_words_tags(sentences):
    """Turn lists of (word, tag) into (words, tags) pairs."""
    return [([word for word, _ in sentence], [tag for _, tag in sentence])
            for sentence in sentences]


def write_output(file_path, words, predictions):
    """
    Write predictions to file: word and tag separated by a tab,
    with an empty line after each sentence.
    Sentences and their tags must line up one to one.
    """
    if len(words) != len(predictions):
        raise ValueError(
            f"Got {len(predictions)} tagged sentences for {len(words)} sentences")
    for idx, (sentence_words, sentence_preds) in enumerate(zip(words, predictions)):
        if len(sentence_words) != len(sentence_preds):
            raise ValueError(
                f"Sentence {idx}: {len(sentence_preds)} tags for {len(sentence_words)} words")

    with open(file_path, 'w', encoding='utf-8') as f:
        for sentence_words, sentence_preds in zip(words, predictions):
            f.writelines(f"{word}\t{pred}\n" for word, pred in zip(sentence_words, sentence_preds))
            f.write("\n")


def evaluate(gold_sentences, pred_sentences):
    """
    Token accuracy of predicted tag sequences against gold ones.
    Both arguments are lists of tag lists, aligned sentence by sentence.
    Returns (correct, total, accuracy).
    """
    if len(gold_sentences) != len(pred_sentences):
        raise ValueError(
            f"Got {len(pred_sentences)} predicted sentences for {len(gold_sentences)} gold ones")

    correct = 0
    total = 0
    for idx, (gold, pred) in enumerate(zip(gold_sentences, pred_sentences)):
        if len(gold) != len(pred):
            raise ValueError(
                f"Sentence {idx}: {len(pred)} predicted tags for {len(gold)} gold tags")
        correct += sum(1 for g, p in zip(gold, pred) if g == p)
        total += len(gold)

    accuracy = correct / total if total > 0 else 0
    return correct, total, accuracy
