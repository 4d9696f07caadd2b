import logging
from typing import Any, Dict, List, Optional

from athenadriver.exc import AthenaNilAPIError

logger = logging.getLogger(__name__)

DEFAULT_BYTES_SCANNED_CUTOFF_PER_QUERY = 1024 * 1024 * 1024


class WGTags:
    """Tags attached to an Athena workgroup, kept in insertion order."""

    def __init__(self):
        self._tags: List[Dict[str, str]] = []

    def add_tag(self, key: str, value: str) -> "WGTags":
        self._tags.append({"Key": key, "Value": value})
        return self

    def get(self) -> List[Dict[str, str]]:
        return [dict(tag) for tag in self._tags]

    def __len__(self):
        return len(self._tags)


def get_default_wg_config() -> Dict[str, Any]:
    return {
        "BytesScannedCutoffPerQuery": DEFAULT_BYTES_SCANNED_CUTOFF_PER_QUERY,
        "EnforceWorkGroupConfiguration": True,
        "PublishCloudWatchMetricsEnabled": True,
        "RequesterPaysEnabled": False,
    }


class Workgroup:
    """
    An Athena workgroup: name, WorkGroupConfiguration and tags.

    The explicit constructor keeps config and tags as given; tags may be None,
    meaning no tags are sent. Use new_default to fill in the standard
    configuration and an empty tag set.
    """

    def __init__(
        self,
        name: str,
        config: Optional[Dict[str, Any]] = None,
        tags: Optional[WGTags] = None,
    ):
        self.name = name
        self.config = config
        self.tags = tags

    @classmethod
    def new_default(
        cls,
        name: str,
        config: Optional[Dict[str, Any]] = None,
        tags: Optional[WGTags] = None,
    ) -> "Workgroup":
        return cls(
            name,
            config if config is not None else get_default_wg_config(),
            tags if tags is not None else WGTags(),
        )

    def create_wg_remotely(self, athena_client) -> None:
        """Create this workgroup in Athena.

        The Tags field is left out of the request entirely when there are no
        tags; Athena validates an empty tag list differently from a missing one.
        Errors from the service are raised unchanged.
        """
        request: Dict[str, Any] = {"Name": self.name}
        if self.config is not None:
            request["Configuration"] = self.config

        tags = self.tags.get() if self.tags is not None else []
        if len(tags) > 0:
            request["Tags"] = tags

        logger.debug("Creating workgroup %s (%d tags)", self.name, len(tags))
        athena_client.create_work_group(**request)


def get_wg(athena_client, name: str) -> Dict[str, Any]:
    """Fetch a workgroup description from Athena."""
    if athena_client is None:
        raise AthenaNilAPIError(context={"workgroup": name})
    response = athena_client.get_work_group(WorkGroup=name)
    return response["WorkGroup"]
