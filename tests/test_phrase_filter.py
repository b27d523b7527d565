from foodlens.phrase_filter import looks_like_phrase


def test_descriptive_translation_is_a_phrase():
    assert looks_like_phrase("comidinhas para comer com as mãos") is True


def test_connectives_trigger_rejection():
    assert looks_like_phrase("carne em conserva") is True
    assert looks_like_phrase("bolo feito em casa") is True
    assert looks_like_phrase("frango com a pele") is True


def test_simple_food_names_pass():
    assert looks_like_phrase("pizza") is False
    assert looks_like_phrase("Arroz branco") is False
    assert looks_like_phrase("pão de queijo") is False


def test_connective_must_be_inside_the_name():
    # "em" with nothing on one side is not padded by spaces
    assert looks_like_phrase("em") is False
    assert looks_like_phrase("creme em") is False


def test_five_tokens_is_a_phrase():
    assert looks_like_phrase("um dois tres quatro") is False
    assert looks_like_phrase("um dois tres quatro cinco") is True
