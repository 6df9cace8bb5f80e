from dataclasses import dataclass

DEFAULT_CLUSTER_TAG_KEY = "ClusterName"


@dataclass(frozen=True)
class ReconcileContext:
    """
    Value Object carrying the ambient configuration of a reconciliation pass.

    The cluster identity tag is injected into every managed resource during
    normalize; location is where new resources are created.
    """
    cluster_name: str
    location: str
    tag_key: str = DEFAULT_CLUSTER_TAG_KEY

    def __post_init__(self) -> None:
        if not self.cluster_name:
            raise ValueError("cluster_name cannot be empty")
        if not self.location:
            raise ValueError("location cannot be empty")
        if not self.tag_key:
            raise ValueError("tag_key cannot be empty")

    @property
    def identity_tags(self) -> dict[str, str]:
        return {self.tag_key: self.cluster_name}
