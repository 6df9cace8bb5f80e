from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceGroupRef:
    """
    Value Object naming the resource group a resource lives in.
    Looked up by name at reconciliation time; the group is not owned.
    """
    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Resource group name cannot be empty")

    def __str__(self) -> str:
        return self.name
