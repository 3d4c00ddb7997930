"""Tests for building a MetaDataStore from configuration."""
import logging
import os

import pytest
from omegaconf import OmegaConf

from metadata_manager.common.common import LOG_NAME, SetCategory
from metadata_manager.common.factory import Factory
from metadata_manager.common.serializable import YAMLSerializable
from metadata_manager.logger import CompositeLogger, EmptyLogger
from metadata_manager.store import MetaDataStore


def _create_config(tmp_path, **overrides):
    """Helper to build a minimal DictConfig for MetaDataStore."""
    config = {"db_path": os.path.join(tmp_path, "store.db"), "use_sqlite": True}
    config.update(overrides)
    return OmegaConf.create(config)


def test_from_config(tmp_path):
    store = MetaDataStore.from_config(_create_config(tmp_path))

    assert store.db_manager.use_sqlite
    assert store.db_path == os.path.join(tmp_path, "store.db")
    assert isinstance(store.logger, EmptyLogger)
    store.sets.add_dataset_set("all", [1])
    assert store.sets.list_sets(SetCategory.DATASET) == ["all"]


def test_yaml_round_trip(tmp_path):
    cfg = _create_config(tmp_path, host="localhost", user="user", password="pass")
    yaml_path = os.path.join(tmp_path, "store.yaml")
    OmegaConf.save(cfg, yaml_path)

    store = MetaDataStore.load(yaml_path)

    assert store.db_path == cfg.db_path
    assert OmegaConf.to_container(store.config) == OmegaConf.to_container(cfg)

    saved_path = os.path.join(tmp_path, "saved.yaml")
    store.save(saved_path)
    assert OmegaConf.to_container(OmegaConf.load(saved_path)) == OmegaConf.to_container(cfg)


def test_store_is_registered():
    assert YAMLSerializable.get_by_name("MetaDataStore") is MetaDataStore


def test_unregistered_name_raises():
    with pytest.raises(ValueError):
        YAMLSerializable.get_by_name("NoSuchStore")


def test_save_without_config_raises(tmp_path):
    store = MetaDataStore(os.path.join(tmp_path, "store.db"))
    with pytest.raises(ValueError):
        store.save(os.path.join(tmp_path, "store.yaml"))


def test_data_survives_reopening(tmp_path):
    cfg = _create_config(tmp_path)
    first = MetaDataStore.from_config(cfg)
    first.runs.add_classifier_performance(3, ("J48", "[]"), "holdout", 0.5)
    first.sets.add_dataset_set("all", [3])
    first.sets.add_classifier_set("trees", [("J48", "[]")])

    reopened = MetaDataStore.from_config(_create_config(tmp_path, readonly=True))
    table = reopened.reader.classifier_performances_for_dataset_set("all", "trees")

    assert table.loc[0, "J48 with configuration: []"] == pytest.approx(0.5)


def test_recreate_discards_data(tmp_path):
    MetaDataStore.from_config(_create_config(tmp_path)).sets.add_dataset_set("all", [3])

    store = MetaDataStore.from_config(_create_config(tmp_path, recreate=True))

    assert store.sets.list_sets(SetCategory.DATASET) == []


def test_log_dir_writes_module_logs(tmp_path):
    log_dir = tmp_path / "logs"
    log_dir.mkdir()

    store = MetaDataStore.from_config(_create_config(tmp_path, log_dir=str(log_dir), debug=True))
    store.sets.add_dataset_set("all", [3, 7])
    for handler in logging.getLogger(LOG_NAME).handlers:
        handler.flush()

    assert isinstance(store.logger, CompositeLogger)
    content = (log_dir / f"{LOG_NAME}.log").read_text()
    assert "Created data set set 'all' with 2 members" in content


def test_missing_log_dir_raises(tmp_path):
    with pytest.raises(ValueError):
        MetaDataStore.from_config(_create_config(tmp_path, log_dir=str(tmp_path / "missing")))


def _cfg_missing_db_path(tmp_path):
    return OmegaConf.create({"use_sqlite": True})


def _cfg_wrong_type_use_sqlite(tmp_path):
    return _create_config(tmp_path, use_sqlite="yes")


def _cfg_invalid_host(tmp_path):
    return _create_config(tmp_path, host=["localhost"])


def _cfg_numeric_password(tmp_path):
    return _create_config(tmp_path, password=12345)


def _cfg_wrong_type_readonly(tmp_path):
    return _create_config(tmp_path, readonly=1)


def _cfg_numeric_db_path(tmp_path):
    return OmegaConf.create({"db_path": 5})


INVALID_CONFIGS = [
    (_cfg_missing_db_path, AttributeError),
    (_cfg_wrong_type_use_sqlite, TypeError),
    (_cfg_invalid_host, TypeError),
    (_cfg_numeric_password, TypeError),
    (_cfg_wrong_type_readonly, TypeError),
    (_cfg_numeric_db_path, TypeError),
]


@pytest.mark.parametrize("cfg_builder, expected_exc", INVALID_CONFIGS)
def test_invalid_configs_raise(cfg_builder, expected_exc, tmp_path):
    cfg = cfg_builder(tmp_path)
    with pytest.raises(expected_exc):
        MetaDataStore.from_config(cfg)


def test_factory_creates_store_by_name(tmp_path):
    store = Factory.create("MetaDataStore", _create_config(tmp_path))

    assert isinstance(store, MetaDataStore)
    assert store.db_manager.use_sqlite


def test_factory_loads_store_from_typed_yaml(tmp_path):
    yaml_path = os.path.join(tmp_path, "store.yaml")
    OmegaConf.save(_create_config(tmp_path, type="MetaDataStore"), yaml_path)

    store = Factory.load(yaml_path)

    assert isinstance(store, MetaDataStore)
    store.sets.add_dataset_set("all", [1])
    assert store.sets.list_sets(SetCategory.DATASET) == ["all"]


def test_factory_load_without_type_raises(tmp_path):
    yaml_path = os.path.join(tmp_path, "store.yaml")
    OmegaConf.save(_create_config(tmp_path), yaml_path)

    with pytest.raises(ValueError):
        Factory.load(yaml_path)


def test_factory_unknown_name_raises(tmp_path):
    with pytest.raises(ValueError):
        Factory.create("NoSuchStore", _create_config(tmp_path))
