"""A pure tokenizer used as a verification fixture."""


def tokenize(text):
    return [word for word in text.split() if word]
