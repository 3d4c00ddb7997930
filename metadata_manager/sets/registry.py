"""Named sets of classifiers, data sets and meta features."""
import logging
from typing import Iterable, List, Mapping, Union

from metadata_manager.common.classifier_key import ClassifierKey
from metadata_manager.common.common import SetCategory
from metadata_manager.db import db
from metadata_manager.db.manager import DatabaseManager, DatabaseSession

logger = logging.getLogger(__name__)

# (sets table, set name column) per category
_SET_TABLES = {
    SetCategory.CLASSIFIER: (db.TABLE_CLASSIFIER_SETS, db.COL_CLASSIFIER_SET_NAME),
    SetCategory.DATASET: (db.TABLE_DATASET_SETS, db.COL_DATASET_SET_NAME),
    SetCategory.METAFEATURE: (db.TABLE_METAFEATURE_SETS, db.COL_METAFEATURE_SET_NAME),
}

ClassifierLike = Union[ClassifierKey, str, tuple]


def _unique(members: Iterable) -> list:
    """Drop repeated members, keeping first occurrences in order."""
    return list(dict.fromkeys(members))


class SetRegistry:
    """Resolves set names to their ordered members.

    Sets are written once by the ``add_*`` methods and never changed
    afterwards. Creating a set while another caller resolves the same name
    can expose a partially written member list; create sets at setup time.
    An unknown or empty set resolves to an empty list.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def list_sets(self, category: SetCategory) -> List[str]:
        """Names of all sets of the given category, in no particular order."""
        table, column = _SET_TABLES[SetCategory(category)]
        with self.db_manager.session() as session:
            rows = session.query(f"SELECT DISTINCT {column} FROM {table}")
        return [row[column] for row in rows]

    def classifier_set_keys(self, set_name: str) -> List[ClassifierKey]:
        """Members of a classifier set ordered by classifier name, then configuration."""
        with self.db_manager.session() as session:
            return self._classifier_set_keys(session, set_name)

    def _classifier_set_keys(self, session: DatabaseSession, set_name: str) -> List[ClassifierKey]:
        ph = session._get_placeholder()
        query = f"""
        SELECT {db.COL_CLASSIFIER_NAME}, {db.COL_CLASSIFIER_CONFIGURATION}
        FROM {db.TABLE_CLASSIFIER_SET_MEMBERS}
        WHERE {db.COL_CLASSIFIER_SET_NAME} = {ph}
        """
        rows = session.query(query, (set_name,))
        keys = [ClassifierKey(row[db.COL_CLASSIFIER_NAME], row[db.COL_CLASSIFIER_CONFIGURATION])
                for row in rows]
        # Sorted here rather than with ORDER BY so the order does not depend on collation.
        return sorted(set(keys))

    def members_of_classifier_set(self, set_name: str) -> List[str]:
        """Members of a classifier set as joined ``name with configuration: config`` strings."""
        return [str(key) for key in self.classifier_set_keys(set_name)]

    def members_of_dataset_set(self, set_name: str) -> List[int]:
        """Data set ids of a data set set, ascending."""
        with self.db_manager.session() as session:
            return self._members_of_dataset_set(session, set_name)

    def _members_of_dataset_set(self, session: DatabaseSession, set_name: str) -> List[int]:
        ph = session._get_placeholder()
        query = f"""
        SELECT {db.COL_DATASET_ID} FROM {db.TABLE_DATASET_SET_MEMBERS}
        WHERE {db.COL_DATASET_SET_NAME} = {ph}
        """
        rows = session.query(query, (set_name,))
        return sorted({int(row[db.COL_DATASET_ID]) for row in rows})

    def members_of_metafeature_set(self, set_name: str) -> List[str]:
        """Meta feature names of a meta feature set, alphabetically."""
        with self.db_manager.session() as session:
            return self._members_of_metafeature_set(session, set_name)

    def _members_of_metafeature_set(self, session: DatabaseSession, set_name: str) -> List[str]:
        ph = session._get_placeholder()
        query = f"""
        SELECT {db.COL_METAFEATURE_NAME} FROM {db.TABLE_METAFEATURE_SET_MEMBERS}
        WHERE {db.COL_METAFEATURE_SET_NAME} = {ph}
        """
        rows = session.query(query, (set_name,))
        return sorted({row[db.COL_METAFEATURE_NAME] for row in rows})

    def members_of_metafeature_group(self, group_name: str) -> List[str]:
        """Meta feature names computed together in a group, alphabetically."""
        with self.db_manager.session() as session:
            ph = session._get_placeholder()
            query = f"""
            SELECT {db.COL_METAFEATURE_NAME} FROM {db.TABLE_METAFEATURE_GROUP_MEMBERS}
            WHERE {db.COL_METAFEATURE_GROUP_NAME} = {ph}
            """
            rows = session.query(query, (group_name,))
        return sorted({row[db.COL_METAFEATURE_NAME] for row in rows})

    def list_metafeature_groups(self) -> List[str]:
        with self.db_manager.session() as session:
            rows = session.query(
                f"SELECT DISTINCT {db.COL_METAFEATURE_GROUP_NAME} FROM {db.TABLE_METAFEATURE_GROUPS}")
        return [row[db.COL_METAFEATURE_GROUP_NAME] for row in rows]

    def add_classifier_set(self, set_name: str, members: Iterable[ClassifierLike]) -> None:
        """Create a classifier set.

        Args:
            set_name: The name of the new classifier set
            members: ``ClassifierKey`` objects, ``(name, configuration)`` pairs
                or joined strings
        """
        keys = _unique(ClassifierKey.coerce(member) for member in members)
        with self.db_manager.session() as session:
            session.insert_without_id(db.TABLE_CLASSIFIER_SETS, {db.COL_CLASSIFIER_SET_NAME: set_name})
            for key in keys:
                session.insert_without_id(db.TABLE_CLASSIFIER_SET_MEMBERS, {
                    db.COL_CLASSIFIER_SET_NAME: set_name,
                    db.COL_CLASSIFIER_NAME: key.classifier_name,
                    db.COL_CLASSIFIER_CONFIGURATION: key.configuration,
                })
        logger.info("Created classifier set '%s' with %d members", set_name, len(keys))

    def add_dataset_set(self, set_name: str, members: Iterable[int]) -> None:
        members = _unique(int(member) for member in members)
        with self.db_manager.session() as session:
            session.insert_without_id(db.TABLE_DATASET_SETS, {db.COL_DATASET_SET_NAME: set_name})
            for dataset_id in members:
                session.insert_without_id(db.TABLE_DATASET_SET_MEMBERS, {
                    db.COL_DATASET_SET_NAME: set_name,
                    db.COL_DATASET_ID: dataset_id,
                })
        logger.info("Created data set set '%s' with %d members", set_name, len(members))

    def add_metafeature_set(self, set_name: str, members: Iterable[str]) -> None:
        members = _unique(members)
        with self.db_manager.session() as session:
            session.insert_without_id(db.TABLE_METAFEATURE_SETS, {db.COL_METAFEATURE_SET_NAME: set_name})
            for metafeature_name in members:
                session.insert_without_id(db.TABLE_METAFEATURE_SET_MEMBERS, {
                    db.COL_METAFEATURE_SET_NAME: set_name,
                    db.COL_METAFEATURE_NAME: metafeature_name,
                })
        logger.info("Created meta feature set '%s' with %d members", set_name, len(members))

    def add_metafeature_groups(self, groups: Mapping[str, Iterable[str]]) -> None:
        """Register meta feature groups, mapping each group name to its features."""
        with self.db_manager.session() as session:
            for group_name, metafeature_names in groups.items():
                session.insert_without_id(db.TABLE_METAFEATURE_GROUPS, {db.COL_METAFEATURE_GROUP_NAME: group_name})
                for metafeature_name in _unique(metafeature_names):
                    session.insert_without_id(db.TABLE_METAFEATURE_GROUP_MEMBERS, {
                        db.COL_METAFEATURE_GROUP_NAME: group_name,
                        db.COL_METAFEATURE_NAME: metafeature_name,
                    })
        logger.info("Registered meta feature groups %s", sorted(groups))
