"""
Tests for the command-line interface.
"""

import json

from img2ppt.cli import main, build_parser, layout_config_from_args


def test_no_images_prints_help(capsys):
    assert main([]) == 1
    assert "usage: img2ppt" in capsys.readouterr().out


def test_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "missing.png")]) == 1
    assert "Input file not found" in capsys.readouterr().err


def test_layout_overrides():
    args = build_parser().parse_args(["a.png", "--padding", "0.1", "--min-font-size", "12", "--snap-colors"])
    config = layout_config_from_args(args)

    assert config.padding_fraction == 0.1
    assert config.min_font_size == 12
    assert config.snap_colors is True


def test_layout_defaults():
    config = layout_config_from_args(build_parser().parse_args(["a.png"]))
    assert config.padding_fraction == 0.05
    assert config.snap_colors is False


def test_replay_conversion(make_image, tmp_path):
    image = make_image("slide.png", 1600, 900)
    detections = tmp_path / "detections"
    detections.mkdir()
    (detections / "slide.elements.json").write_text(
        json.dumps([{"text": "Hello", "box_2d": [100, 100, 300, 400], "hasContainer": True}]),
        encoding="utf-8",
    )
    out = tmp_path / "out"

    code = main(
        [
            str(image),
            "--from-detections",
            str(detections),
            "--no-clean-background",
            "--output-dir",
            str(out),
        ]
    )

    assert code == 0
    assert (out / "slide.pptx").exists()
    assert (out / "slide.layout.json").exists()


def test_all_images_failing_exits_nonzero(make_image, tmp_path):
    image = make_image("slide.png")
    detections = tmp_path / "empty"
    detections.mkdir()

    code = main([str(image), "--from-detections", str(detections), "--output-dir", str(tmp_path / "out")])

    assert code == 1


def test_padding_below_text_inflation_is_rejected(make_image, capsys):
    image = make_image("slide.png")
    assert main([str(image), "--padding", "0.02"]) == 1
    assert "padding_fraction" in capsys.readouterr().err
