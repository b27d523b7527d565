from foodlens.food_gate import is_food, label_gate, object_gate
from foodlens.pipeline_types import LabelAnnotation, ObjectAnnotation


def test_no_signal_is_rejected():
    assert is_food([], []) is False


def test_food_label_above_threshold_passes():
    assert is_food([LabelAnnotation("food", 0.8)], []) is True


def test_food_label_below_threshold_fails():
    assert is_food([LabelAnnotation("food", 0.5)], []) is False


def test_label_gate_uses_normalized_text():
    assert label_gate([LabelAnnotation(" Dish! ", 0.9)]) is True
    assert label_gate([LabelAnnotation("Pizza", 0.99)]) is False


def test_label_threshold_is_inclusive():
    assert label_gate([LabelAnnotation("meal", 0.75)]) is True


def test_object_gate_accepts_confident_food_object():
    assert object_gate([ObjectAnnotation("Pizza", 0.85)]) is True


def test_object_gate_blocks_non_food_objects():
    objects = [ObjectAnnotation("Person", 0.95), ObjectAnnotation("Car", 0.9)]
    assert object_gate(objects) is False


def test_object_gate_needs_high_score():
    assert object_gate([ObjectAnnotation("Apple", 0.74)]) is False


def test_person_label_does_not_open_gate():
    assert is_food([LabelAnnotation("person", 0.95)], []) is False
