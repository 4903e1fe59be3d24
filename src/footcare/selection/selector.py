from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional

from src.footcare.errors import NoPatientGroups
from src.footcare.models.app_types import SelectionState

logger = logging.getLogger(__name__)


def as_mapping(node: Any) -> Dict[str, Any]:
    """A store node as a dict keyed by child id.

    Firebase returns a collection whose keys are 0, 1, 2... as a list, with
    None in place of missing indices.
    """
    if isinstance(node, dict):
        return node
    if isinstance(node, list):
        return {str(i): v for i, v in enumerate(node) if v is not None}
    return {}


def _patients_of(group: Any) -> Dict[str, Any]:
    if not isinstance(group, dict):
        return {}
    return as_mapping(group.get("patients"))


def eligible_groups(snapshot: Any) -> List[str]:
    """Group ids that hold at least one patient."""
    return [gid for gid, group in as_mapping(snapshot).items() if _patients_of(group)]


def select_patient(
    snapshot: Any,
    rng: Optional[random.Random] = None,
    previous: Optional[SelectionState] = None,
    mode: str = "random",
) -> SelectionState:
    """Pick a group, then a patient inside it.

    In "random" mode every call picks afresh. In "sticky" mode the previous
    patient is kept while it is still present in the snapshot.
    """
    rng = rng or random
    snapshot = as_mapping(snapshot)
    groups = eligible_groups(snapshot)
    if not groups:
        raise NoPatientGroups()

    if mode == "sticky" and previous is not None:
        siblings = list(_patients_of(snapshot.get(previous.group_id)))
        if previous.patient_id in siblings:
            return SelectionState(previous.group_id, previous.patient_id, tuple(siblings))

    group_id = rng.choice(groups)
    siblings = list(_patients_of(snapshot[group_id]))
    patient_id = rng.choice(siblings)
    logger.debug("selected %s/%s (%d siblings)", group_id, patient_id, len(siblings))
    return SelectionState(group_id, patient_id, tuple(siblings))


def patient_path(root: str, selection: SelectionState) -> str:
    return f"{root}/{selection.group_id}/patients/{selection.patient_id}"
