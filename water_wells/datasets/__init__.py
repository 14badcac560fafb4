"""
Dataset registry.

Maps the URL slug of each provincial dataset to its Retriever.
"""

from typing import Dict, List

from ..exceptions import DatasetNotFoundError
from ..retriever import Retriever
from .alberta import ALBERTA
from .british_columbia import BRITISH_COLUMBIA
from .nova_scotia import NOVA_SCOTIA
from .ontario import ONTARIO
from .saskatchewan import SASKATCHEWAN

DATASETS: Dict[str, Retriever] = {
    retriever.slug: retriever
    for retriever in (ALBERTA, BRITISH_COLUMBIA, NOVA_SCOTIA, ONTARIO, SASKATCHEWAN)
}


def get_dataset(slug: str) -> Retriever:
    """
    Look up a dataset by slug.

    Raises:
        DatasetNotFoundError: If no dataset is registered under ``slug``
    """
    try:
        return DATASETS[slug.lower()]
    except KeyError:
        raise DatasetNotFoundError(slug) from None


def list_datasets() -> List[Retriever]:
    return list(DATASETS.values())


__all__ = ["DATASETS", "get_dataset", "list_datasets"]
