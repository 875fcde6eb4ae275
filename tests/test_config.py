"""
Tests for TransformConfig, the YAML config loader and logging setup.
"""
import dataclasses
import logging

import pytest

from openxform import (InterpolationMode, TransformConfig,
                       get_default_transform_config, load_transform_config)
from openxform.core import log_utils
from openxform.core.log_utils import default_log_directory, setup_logging

CONFIG_LOGGER = "openxform.core.config"


class TestTransformConfig:

    def test_defaults(self):
        config = get_default_transform_config()
        assert config.interpolation is InterpolationMode.BILINEAR
        assert config.background_value == 0xFFFFFFFF
        assert config.num_workers == 1
        assert config.parallel_threshold > 1

    def test_interpolation_is_parsed(self):
        assert TransformConfig(interpolation="none").interpolation is InterpolationMode.NEAREST
        assert TransformConfig(interpolation="Cubic").interpolation is InterpolationMode.BICUBIC

    def test_background_is_masked(self):
        assert TransformConfig(background_value=-1).background_value == 0xFFFFFFFF

    @pytest.mark.parametrize("field", ["num_workers", "parallel_threshold"])
    def test_non_positive_counts_rejected(self, field):
        with pytest.raises(ValueError, match=field):
            TransformConfig(**{field: 0})

    def test_is_frozen(self):
        config = TransformConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.num_workers = 8


class TestLoadTransformConfig:

    def test_missing_file_gives_defaults(self, tmp_path, caplog):
        with caplog.at_level(logging.INFO, logger=CONFIG_LOGGER):
            config = load_transform_config(tmp_path / "absent.yaml")
        assert config == get_default_transform_config()
        assert "using defaults" in caplog.text

    def test_valid_file(self, tmp_path):
        path = tmp_path / "xform.yaml"
        path.write_text("interpolation: bicubic\n"
                        "num_workers: 4\n"
                        "background_value: 4278190080\n", encoding="utf-8")

        config = load_transform_config(str(path))

        assert config.interpolation is InterpolationMode.BICUBIC
        assert config.num_workers == 4
        assert config.background_value == 0xFF000000
        assert config.parallel_threshold == get_default_transform_config().parallel_threshold

    @pytest.mark.parametrize("content", [
        "interpolation: [bicubic\n",
        "",
        "- just\n- a list\n",
        "shear_factor: 2\n",
        "interpolation: lanczos\n",
        "num_workers: 0\n",
        "num_workers: many\n",
    ])
    def test_invalid_content_falls_back_with_warning(self, tmp_path, caplog, content):
        path = tmp_path / "xform.yaml"
        path.write_text(content, encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger=CONFIG_LOGGER):
            config = load_transform_config(path)

        assert config == get_default_transform_config()
        assert any(record.levelno == logging.WARNING for record in caplog.records)


class TestSetupLogging:

    def test_writes_to_given_file(self, tmp_path, restore_root_logging):
        log_file = tmp_path / "logs" / "run.log"

        result = setup_logging("debug", log_file=log_file, console=False)
        logging.getLogger("openxform.test").debug("debug line reaches the file")

        assert result == log_file
        text = log_file.read_text(encoding="utf-8")
        assert "OpenXform logging started - Level: DEBUG" in text
        assert "debug line reaches the file" in text
        assert logging.getLogger().level == logging.DEBUG

    def test_replaces_existing_handlers(self, tmp_path, restore_root_logging):
        setup_logging(log_file=tmp_path / "a.log", console=False)
        setup_logging(log_file=tmp_path / "b.log", console=True)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 2
        assert sum(isinstance(h, logging.FileHandler) for h in handlers) == 1

    def test_default_file_in_log_directory(self, tmp_path, monkeypatch, restore_root_logging):
        monkeypatch.setattr(log_utils, "default_log_directory", lambda: tmp_path / "default")

        log_file = setup_logging(console=False)

        assert log_file.parent == tmp_path / "default"
        assert log_file.name.startswith("openxform_")
        assert log_file.exists()

    def test_unknown_level(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown log level"):
            setup_logging("chatty", log_file=tmp_path / "x.log")

    def test_default_log_directory(self):
        assert default_log_directory().parts[-2:] == ("openxform", "logs")
