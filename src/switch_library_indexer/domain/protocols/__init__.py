from switch_library_indexer.domain.protocols.bucket_store_protocol import (
    BucketStoreProtocol,
    BucketTransactionProtocol,
)
from switch_library_indexer.domain.protocols.container_parser_protocol import (
    ContainerParserProtocol,
)
from switch_library_indexer.domain.protocols.metadata_cache_protocol import MetadataCacheProtocol
from switch_library_indexer.domain.protocols.package_store_protocol import PackageStoreProtocol
from switch_library_indexer.domain.protocols.progress_protocol import ProgressProtocol

__all__ = [
    "BucketStoreProtocol",
    "BucketTransactionProtocol",
    "ContainerParserProtocol",
    "MetadataCacheProtocol",
    "PackageStoreProtocol",
    "ProgressProtocol",
]
