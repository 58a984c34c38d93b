# sphere_authority/metadata/__init__.py
#
# Logical database metadata and the physical data sources behind it.

from sphere_authority.metadata.data_source import DataSource, parse_url  # noqa: F401
from sphere_authority.metadata.meta_data import (  # noqa: F401
    ShardingSphereMetaData,
    ShardingSphereResource,
    ShardingSphereRuleMetaData,
)

__all__ = [
    "DataSource",
    "parse_url",
    "ShardingSphereMetaData",
    "ShardingSphereResource",
    "ShardingSphereRuleMetaData",
]
