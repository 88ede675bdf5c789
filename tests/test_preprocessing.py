import pytest

from page_probe.preprocessing import remove_stopwords, split_sentences, split_words, to_bag_of_words


@pytest.mark.parametrize("text, expected", [
    ("Dr. Smith visited Washington. He returned home.", ["Dr. Smith visited Washington", "He returned home"]),
    ("The U.S. economy grew. Prices fell.", ["The U.S. economy grew", "Prices fell"]),
    ("Pi is 3.14 roughly. Next one.", ["Pi is 3.14 roughly", "Next one"]),
    ("Wait...then we go.", ["Wait...then we go"]),
    ("Really? Yes! Okay", ["Really", "Yes", "Okay"]),
    ("Line one\nLine two", ["Line one", "Line two"]),
    ("Visit example.com today. Thanks.", ["Visit example.com today", "Thanks"]),
])
def test_split_sentences(text, expected):
    assert split_sentences(text) == expected

def test_closing_quote_stays_with_its_sentence():
    assert split_sentences('He said "stop." Then he left.') == ['He said "stop"', "Then he left"]

def test_custom_abbreviations():
    text = "Call Acme Corp. tomorrow."
    assert split_sentences(text) == ["Call Acme Corp", "tomorrow"]
    assert split_sentences(text, abbreviations=("corp",)) == ["Call Acme Corp. tomorrow"]

def test_empty_text_has_no_sentences():
    assert split_sentences("   ") == []


@pytest.mark.parametrize("sentence, expected", [
    ("The U.S. army", ["the", "u.s.", "army"]),
    ("[12] The cat sat", ["the", "cat", "sat"]),
    ("Hello, world!", ["hello", "world"]),
    ("don't", ["don", "t"]),
    ("  spaced   out  ", ["spaced", "out"]),
])
def test_split_words(sentence, expected):
    assert split_words(sentence) == expected

def test_remove_stopwords_is_case_insensitive():
    assert remove_stopwords(["The", "Cat", "is", "here"]) == ["Cat"]

def test_bag_of_words_keeps_full_length():
    bag = to_bag_of_words(["the", "cat", "the", "cat", "sat"])
    assert bag.counts == {"cat": 2, "sat": 1}
    assert bag.inner_length == 5
    assert len(bag) == 2

def test_bag_of_words_with_stopwords():
    bag = to_bag_of_words(["the", "cat", "the"], remove_stop=False)
    assert bag.counts == {"the": 2, "cat": 1}
    assert bag.inner_length == 3
