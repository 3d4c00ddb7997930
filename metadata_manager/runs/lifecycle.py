"""Creation and completion of classifier and meta feature runs."""
import logging
from typing import Any, Dict, Mapping, Optional

from metadata_manager.common.classifier_key import ClassifierKey
from metadata_manager.common.common import RunStatus
from metadata_manager.common.sentinel import encode_measurement, decode_measurement
from metadata_manager.db import db
from metadata_manager.db.manager import DatabaseManager, DatabaseSession, QueryError, PersistenceError
from metadata_manager.db.tables import ClassifierRun, MetaFeatureRun
from metadata_manager.sets.registry import ClassifierLike

logger = logging.getLogger(__name__)


class ExperimentLifecycle:
    """Writes runs and their results.

    A run is inserted with status ``created`` and moved straight to
    ``finished`` when its results are written. Each public method runs in a
    single transaction, so a failed call leaves no partial rows behind and
    the run keeps its previous status. There is no locking across calls:
    concurrent writers to the same run must be serialized by the caller.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def create_classifier_run(self, dataset_id: int, classifier: ClassifierLike,
                              evaluation_method: str) -> int:
        """Insert a classifier run and return its id.

        Args:
            dataset_id: The data set the classifier is evaluated on
            classifier: A ``ClassifierKey``, a ``(name, configuration)`` pair or
                a joined ``name with configuration: config`` string
            evaluation_method: How the performance is going to be measured

        Raises:
            MalformedInputError: If a joined string lacks the separator.
            PersistenceError: If the database rejects the run.
        """
        key = ClassifierKey.coerce(classifier)
        with self.db_manager.session() as session:
            return self._create_classifier_run(session, dataset_id, key, evaluation_method)

    def _create_classifier_run(self, session: DatabaseSession, dataset_id: int,
                               key: ClassifierKey, evaluation_method: str) -> int:
        fields = {
            db.COL_DATASET_ID: dataset_id,
            db.COL_CLASSIFIER_NAME: key.classifier_name,
            db.COL_CLASSIFIER_CONFIGURATION: key.configuration,
            db.COL_CLASSIFIER_EVALUATION_METHOD: evaluation_method,
        }
        try:
            run_id = session.insert(db.TABLE_CLASSIFIER_RUNS, fields)
        except QueryError as e:
            self._fail("create_classifier_run", fields, e)
        logger.debug("Created classifier run %s for data set %s", run_id, dataset_id)
        return run_id

    def record_classifier_performance(self, run_id: int, performance: Optional[float]) -> None:
        """Store the performance of a classifier run and mark it finished.

        NaN is stored as the missing value sentinel.

        Raises:
            PersistenceError: If the run does not exist or the update fails.
        """
        with self.db_manager.session() as session:
            self._record_classifier_performance(session, run_id, performance)

    def _record_classifier_performance(self, session: DatabaseSession, run_id: int,
                                       performance: Optional[float]) -> None:
        values = {
            db.COL_CLASSIFIER_PERFORMANCE: encode_measurement(performance),
            db.COL_STATUS: RunStatus.FINISHED.value,
        }
        params = {db.COL_CLASSIFIER_RUN_ID: run_id, db.COL_CLASSIFIER_PERFORMANCE: performance}
        try:
            matched = session.update(db.TABLE_CLASSIFIER_RUNS, values, {db.COL_CLASSIFIER_RUN_ID: run_id})
        except QueryError as e:
            self._fail("record_classifier_performance", params, e)
        if matched == 0:
            self._fail("record_classifier_performance", params, None)

    def add_classifier_performance(self, dataset_id: int, classifier: ClassifierLike,
                                   evaluation_method: str, performance: Optional[float]) -> int:
        """Create a classifier run and record its performance in one transaction."""
        key = ClassifierKey.coerce(classifier)
        with self.db_manager.session() as session:
            run_id = self._create_classifier_run(session, dataset_id, key, evaluation_method)
            self._record_classifier_performance(session, run_id, performance)
        return run_id

    def create_metafeature_run(self, dataset_id: int) -> int:
        """Insert a meta feature run for a data set and return its id."""
        with self.db_manager.session() as session:
            return self._create_metafeature_run(session, dataset_id)

    def _create_metafeature_run(self, session: DatabaseSession, dataset_id: int) -> int:
        fields = {db.COL_DATASET_ID: dataset_id}
        try:
            run_id = session.insert(db.TABLE_METAFEATURE_RUNS, fields)
        except QueryError as e:
            self._fail("create_metafeature_run", fields, e)
        logger.debug("Created meta feature run %s for data set %s", run_id, dataset_id)
        return run_id

    def record_metafeature_results(self, dataset_id: int,
                                   feature_values: Mapping[str, Optional[float]],
                                   group_times: Mapping[str, float],
                                   run_id: Optional[int] = None) -> int:
        """Store computed meta features and group computation times.

        If ``run_id`` is None a new run is created for the data set first.
        Times, values and the final status update share one transaction:
        either all of them are stored and the run is ``finished``, or none
        are and the run keeps its previous status.

        Args:
            dataset_id: The data set the meta features were computed for
            feature_values: Meta feature name to value (NaN allowed)
            group_times: Meta feature group name to computation time in seconds
            run_id: An existing meta feature run, if any

        Returns:
            The id of the run the results were written to.

        Raises:
            PersistenceError: If any write is rejected or the run does not exist.
        """
        with self.db_manager.session() as session:
            if run_id is None:
                run_id = self._create_metafeature_run(session, dataset_id)
            params = {db.COL_DATASET_ID: dataset_id, db.COL_METAFEATURE_RUN_ID: run_id}
            try:
                for group_name, elapsed in group_times.items():
                    session.insert_without_id(db.TABLE_METAFEATURE_TIMES, {
                        db.COL_METAFEATURE_RUN_ID: run_id,
                        db.COL_METAFEATURE_GROUP_NAME: group_name,
                        db.COL_METAFEATURE_COMPUTATION_TIME: elapsed,
                    })
                for metafeature_name, value in feature_values.items():
                    session.insert_without_id(db.TABLE_METAFEATURE_VALUES, {
                        db.COL_METAFEATURE_RUN_ID: run_id,
                        db.COL_METAFEATURE_NAME: metafeature_name,
                        db.COL_METAFEATURE_VALUE: encode_measurement(value),
                    })
                matched = session.update(db.TABLE_METAFEATURE_RUNS,
                                         {db.COL_STATUS: RunStatus.FINISHED.value},
                                         {db.COL_METAFEATURE_RUN_ID: run_id})
            except QueryError as e:
                self._fail("record_metafeature_results", params, e)
            if matched == 0:
                self._fail("record_metafeature_results", params, None)
        return run_id

    def get_classifier_run(self, run_id: int) -> Optional[ClassifierRun]:
        with self.db_manager.session() as session:
            ph = session._get_placeholder()
            rows = session.query(
                f"SELECT * FROM {db.TABLE_CLASSIFIER_RUNS} WHERE {db.COL_CLASSIFIER_RUN_ID} = {ph}",
                (run_id,))
        if not rows:
            return None
        row = rows[0]
        performance = row[db.COL_CLASSIFIER_PERFORMANCE]
        return ClassifierRun(
            id=row[db.COL_CLASSIFIER_RUN_ID],
            dataset_id=row[db.COL_DATASET_ID],
            classifier=ClassifierKey(row[db.COL_CLASSIFIER_NAME], row[db.COL_CLASSIFIER_CONFIGURATION]),
            evaluation_method=row[db.COL_CLASSIFIER_EVALUATION_METHOD],
            performance=None if performance is None else decode_measurement(performance),
            status=RunStatus(row[db.COL_STATUS]),
        )

    def get_metafeature_run(self, run_id: int) -> Optional[MetaFeatureRun]:
        with self.db_manager.session() as session:
            ph = session._get_placeholder()
            rows = session.query(
                f"SELECT * FROM {db.TABLE_METAFEATURE_RUNS} WHERE {db.COL_METAFEATURE_RUN_ID} = {ph}",
                (run_id,))
        if not rows:
            return None
        row = rows[0]
        return MetaFeatureRun(
            id=row[db.COL_METAFEATURE_RUN_ID],
            dataset_id=row[db.COL_DATASET_ID],
            status=RunStatus(row[db.COL_STATUS]),
        )

    @staticmethod
    def _fail(operation: str, params: Dict[str, Any], cause: Optional[Exception]):
        if cause is None:
            message = f"{operation} matched no run: {params}"
        else:
            message = f"{operation} failed for {params}: {cause}"
        logger.error(message)
        raise PersistenceError(message, operation=operation, params=params) from cause
