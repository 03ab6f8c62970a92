"""Default base-form reducer backed by lemminflect."""
from lemminflect import getLemma


def to_base_form(word: str) -> str:
    """
    Reduce a word to its base verb form (e.g. "added" -> "add").

    Only lemminflect's verb dictionary is consulted. Words it does not know
    as verbs ("data", "this", "news") are returned unchanged rather than run
    through its rule-based guesser.
    """
    if not word:
        return word

    lemmas = getLemma(word, upos="VERB", lemmatize_oov=False)
    return lemmas[0] if lemmas else word
