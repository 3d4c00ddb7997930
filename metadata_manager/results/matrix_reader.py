"""Reads classifier performances and meta features as dense tables."""
import logging
from typing import List

import pandas as pd

from metadata_manager.common.classifier_key import ClassifierKey
from metadata_manager.common.common import RunStatus
from metadata_manager.db import db
from metadata_manager.db.manager import DatabaseManager, DatabaseSession
from metadata_manager.results.pivot import pivot
from metadata_manager.sets.registry import SetRegistry

logger = logging.getLogger(__name__)


class MatrixReader:
    """Projects stored runs onto (data set x set member) tables.

    The members of the requested sets decide the rows and columns of every
    table; only runs with status ``finished`` contribute values, and if a
    data set has several finished runs for the same column the most recent
    run wins.
    """

    def __init__(self, db_manager: DatabaseManager, registry: SetRegistry):
        self.db_manager = db_manager
        self.registry = registry

    def classifier_performances_for_dataset(self, dataset_id: int, classifier_set_name: str) -> pd.DataFrame:
        """Performance of every member of a classifier set on one data set (a single row)."""
        with self.db_manager.session() as session:
            ph = session._get_placeholder()
            return self._classifier_table(
                session, [dataset_id], classifier_set_name,
                dataset_filter=f"r.{db.COL_DATASET_ID} = {ph}",
                dataset_param=dataset_id,
                name=f"{dataset_id}_{classifier_set_name}_performanceValues")

    def classifier_performances_for_dataset_set(self, dataset_set_name: str,
                                                classifier_set_name: str) -> pd.DataFrame:
        """Performance of every member of a classifier set on every data set of a data set set."""
        with self.db_manager.session() as session:
            ph = session._get_placeholder()
            dataset_ids = self.registry._members_of_dataset_set(session, dataset_set_name)
            return self._classifier_table(
                session, dataset_ids, classifier_set_name,
                dataset_filter=self._dataset_set_filter(ph),
                dataset_param=dataset_set_name,
                name=f"{dataset_set_name}_{classifier_set_name}_performanceValues")

    def metafeatures_for_dataset(self, dataset_id: int, metafeature_set_name: str) -> pd.DataFrame:
        """Values of the meta features of a meta feature set for one data set (a single row)."""
        with self.db_manager.session() as session:
            ph = session._get_placeholder()
            return self._metafeature_table(
                session, [dataset_id], metafeature_set_name,
                dataset_filter=f"r.{db.COL_DATASET_ID} = {ph}",
                dataset_param=dataset_id,
                name=f"{dataset_id}_{metafeature_set_name}_metafeatures")

    def metafeatures_for_dataset_set(self, dataset_set_name: str, metafeature_set_name: str) -> pd.DataFrame:
        """Values of the meta features of a meta feature set for every data set of a data set set."""
        with self.db_manager.session() as session:
            ph = session._get_placeholder()
            dataset_ids = self.registry._members_of_dataset_set(session, dataset_set_name)
            return self._metafeature_table(
                session, dataset_ids, metafeature_set_name,
                dataset_filter=self._dataset_set_filter(ph),
                dataset_param=dataset_set_name,
                name=f"{dataset_set_name}_{metafeature_set_name}")

    @staticmethod
    def _dataset_set_filter(ph: str) -> str:
        return (f"r.{db.COL_DATASET_ID} IN (SELECT {db.COL_DATASET_ID} FROM {db.TABLE_DATASET_SET_MEMBERS} "
                f"WHERE {db.COL_DATASET_SET_NAME} = {ph})")

    def _classifier_table(self, session: DatabaseSession, dataset_ids: List[int], classifier_set_name: str,
                          dataset_filter: str, dataset_param, name: str) -> pd.DataFrame:
        keys = self.registry._classifier_set_keys(session, classifier_set_name)
        ph = session._get_placeholder()
        query = f"""
        SELECT r.{db.COL_DATASET_ID}, r.{db.COL_CLASSIFIER_NAME}, r.{db.COL_CLASSIFIER_CONFIGURATION},
               r.{db.COL_CLASSIFIER_PERFORMANCE}
        FROM {db.TABLE_CLASSIFIER_RUNS} AS r
        INNER JOIN {db.TABLE_CLASSIFIER_SET_MEMBERS} AS m
            ON r.{db.COL_CLASSIFIER_NAME} = m.{db.COL_CLASSIFIER_NAME}
            AND r.{db.COL_CLASSIFIER_CONFIGURATION} = m.{db.COL_CLASSIFIER_CONFIGURATION}
        WHERE m.{db.COL_CLASSIFIER_SET_NAME} = {ph}
            AND r.{db.COL_STATUS} = {ph}
            AND {dataset_filter}
        ORDER BY r.{db.COL_CLASSIFIER_RUN_ID}
        """
        rows = session.query(query, (classifier_set_name, RunStatus.FINISHED.value, dataset_param))
        logger.debug("Read %d classifier measurements for '%s'", len(rows), name)
        sparse = (
            (row[db.COL_DATASET_ID],
             str(ClassifierKey(row[db.COL_CLASSIFIER_NAME], row[db.COL_CLASSIFIER_CONFIGURATION])),
             row[db.COL_CLASSIFIER_PERFORMANCE])
            for row in rows
        )
        return pivot(dataset_ids, [str(key) for key in keys], sparse, name=name)

    def _metafeature_table(self, session: DatabaseSession, dataset_ids: List[int], metafeature_set_name: str,
                           dataset_filter: str, dataset_param, name: str) -> pd.DataFrame:
        metafeature_names = self.registry._members_of_metafeature_set(session, metafeature_set_name)
        ph = session._get_placeholder()
        query = f"""
        SELECT r.{db.COL_DATASET_ID}, v.{db.COL_METAFEATURE_NAME}, v.{db.COL_METAFEATURE_VALUE}
        FROM {db.TABLE_METAFEATURE_RUNS} AS r
        INNER JOIN {db.TABLE_METAFEATURE_VALUES} AS v
            ON r.{db.COL_METAFEATURE_RUN_ID} = v.{db.COL_METAFEATURE_RUN_ID}
        WHERE v.{db.COL_METAFEATURE_NAME} IN (
                SELECT {db.COL_METAFEATURE_NAME} FROM {db.TABLE_METAFEATURE_SET_MEMBERS}
                WHERE {db.COL_METAFEATURE_SET_NAME} = {ph})
            AND r.{db.COL_STATUS} = {ph}
            AND {dataset_filter}
        ORDER BY r.{db.COL_METAFEATURE_RUN_ID}
        """
        rows = session.query(query, (metafeature_set_name, RunStatus.FINISHED.value, dataset_param))
        logger.debug("Read %d meta feature values for '%s'", len(rows), name)
        sparse = (
            (row[db.COL_DATASET_ID], row[db.COL_METAFEATURE_NAME], row[db.COL_METAFEATURE_VALUE])
            for row in rows
        )
        return pivot(dataset_ids, metafeature_names, sparse, name=name)
