from .pipeline import (
    AssetSource,
    BatchResult,
    DistributionBlocked,
    InMemoryAssetSource,
    OrchestratorPolicy,
    check_distribution_codes,
    evaluate_project_assets,
)

__all__ = [
    "AssetSource",
    "BatchResult",
    "DistributionBlocked",
    "InMemoryAssetSource",
    "OrchestratorPolicy",
    "check_distribution_codes",
    "evaluate_project_assets",
]
