import pytest

from texeltune import DEFAULT_EVALUATOR, EvalConfig, EvaluatorRegistry, create_evaluator
from texeltune.evaluators import MaterialEvaluator, SplitPstEvaluator, SquarePstEvaluator


def test_registry_lists_every_variant() -> None:
    assert EvaluatorRegistry.names() == ("material", "material_tapered", "split_pst", "square_pst")
    assert DEFAULT_EVALUATOR in EvaluatorRegistry.names()


def test_default_is_split_pst() -> None:
    evaluator = create_evaluator()
    assert isinstance(evaluator, SplitPstEvaluator)
    assert evaluator.tapered


def test_presets_pick_classes_and_configs() -> None:
    material = create_evaluator("material")
    assert isinstance(material, MaterialEvaluator)
    assert not material.tapered
    assert create_evaluator("material_tapered").tapered
    square = create_evaluator("square_pst")
    assert isinstance(square, SquarePstEvaluator)
    assert not square.config.rebalance


def test_unknown_name_raises() -> None:
    with pytest.raises(ValueError, match="Unknown evaluator 'psqt'"):
        EvaluatorRegistry.resolve("psqt")


def test_overrides_apply_on_top_of_config() -> None:
    evaluator = create_evaluator("split_pst", EvalConfig(rebalance=False), tapered=False)
    assert not evaluator.tapered
    assert not evaluator.config.rebalance


def test_max_phase_is_clamped() -> None:
    evaluator = create_evaluator("material_tapered", max_phase=0)
    assert evaluator.config.max_phase == 1


def test_logger_receives_resolution_and_printing() -> None:
    messages = []
    evaluator = create_evaluator("material", logger=messages.append)
    assert messages[0] == "evaluator resolved: material (tapered=False)"
    assert messages[1] == "material: 1 feature families, 6 parameters (tapered=False)"

    evaluator.print_parameters(evaluator.initial_parameters(), output=lambda _: None)
    assert messages[-1] == "material: printing 6 parameters"


def test_dev_flag_prints_debug_lines(capsys) -> None:
    create_evaluator("material")
    assert capsys.readouterr().out == ""

    create_evaluator("material", dev=True)
    out = capsys.readouterr().out
    assert "DEBUG" in out
    assert "evaluator resolved: material (tapered=False)" in out
