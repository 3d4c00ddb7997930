from typing import Optional
from omegaconf import DictConfig

from metadata_manager.common.serializable import YAMLSerializable
from metadata_manager.db.manager import DatabaseManager
from metadata_manager.logger import BaseLogger, CompositeLogger, EmptyLogger
from metadata_manager.results.matrix_reader import MatrixReader
from metadata_manager.runs.lifecycle import ExperimentLifecycle
from metadata_manager.sets.registry import SetRegistry


@YAMLSerializable.register("MetaDataStore")
class MetaDataStore(YAMLSerializable):
    """
    Entry point for storing and reading benchmark metadata.

    The schema is expected to exist already; for SQLite (and MySQL, given
    the rights) it is created on first use. Work is split between three
    collaborators sharing one ``DatabaseManager``:

    - ``sets``: set registry (create sets, resolve their members)
    - ``runs``: run lifecycle (create runs, record results)
    - ``reader``: dense performance / meta feature tables

    Example:
        store = MetaDataStore.load("store.yaml")
        store.sets.add_dataset_set("small", [3, 7])
        run_id = store.runs.create_classifier_run(3, ("J48", "[-C, 0.25]"), "10-fold-cv")
        store.runs.record_classifier_performance(run_id, 0.91)
        table = store.reader.classifier_performances_for_dataset_set("small", "trees")
    """

    def __init__(self,
                 db_path: str,
                 use_sqlite: bool = True,
                 host: str = "localhost",
                 user: str = "root",
                 password: str = "",
                 readonly: bool = False,
                 recreate: bool = False,
                 logger: Optional[BaseLogger] = None,
                 config: DictConfig = None):
        super().__init__(config)

        self.db_path = db_path
        self.logger = logger or EmptyLogger()
        self.db_manager = DatabaseManager(
            database_path=db_path,
            use_sqlite=use_sqlite,
            host=host,
            user=user,
            password=password,
            recreate=recreate,
            readonly=readonly
        )
        self.sets = SetRegistry(self.db_manager)
        self.runs = ExperimentLifecycle(self.db_manager)
        self.reader = MatrixReader(self.db_manager, self.sets)
        backend = "SQLite" if use_sqlite else f"MySQL at {host}"
        self.logger.info(f"Using {backend} database '{db_path}'")

    @classmethod
    def from_config(cls, config: DictConfig):
        # Validate configuration before attempting instantiation
        cls._validate_config(config)

        logger = None
        if config.get('verbose', False) or config.get('log_dir') is not None:
            logger = CompositeLogger(log_dir=config.get('log_dir'),
                                     debug=config.get('debug', False))

        return cls(
            db_path=config.db_path,
            use_sqlite=config.get('use_sqlite', True),
            host=config.get('host', 'localhost'),
            user=config.get('user', 'root'),
            password=config.get('password', ''),
            readonly=config.get('readonly', False),
            recreate=config.get('recreate', False),
            logger=logger,
            config=config,
        )

    @staticmethod
    def _validate_config(config: DictConfig):
        """Validate YAML/DictConfig for required fields and correct types."""
        # Required field: db_path must be a string
        if not hasattr(config, "db_path") or config.get("db_path") is None:
            raise AttributeError("'db_path' is a required configuration field for MetaDataStore")
        if not isinstance(config.db_path, str):
            raise TypeError("'db_path' must be a string path")

        for field in ("use_sqlite", "readonly", "recreate", "verbose", "debug"):
            if field in config and not isinstance(config.get(field), bool):
                raise TypeError(f"'{field}' must be a boolean")

        for field in ("host", "user", "password", "type"):
            if field in config and not isinstance(config.get(field), str):
                raise TypeError(f"'{field}' must be a string")

        if config.get("log_dir") is not None and not isinstance(config.log_dir, str):
            raise TypeError("'log_dir' must be a string path")
