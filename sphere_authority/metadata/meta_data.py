# sphere_authority/metadata/meta_data.py

from dataclasses import dataclass, field
from typing import Any, Dict, List

from sphere_authority.metadata.data_source import DataSource


@dataclass
class ShardingSphereResource:
    """Physical data sources backing one logical database, by name."""
    data_sources: Dict[str, DataSource] = field(default_factory=dict)

    def all_instance_data_sources(self) -> List[DataSource]:
        """
        One data source per physical instance, in declaration order.

        Several data sources (e.g. ``ds_0`` and ``ds_1`` as two schemas on
        the same server) collapse to the first one seen for their host:port.
        """
        seen = set()
        result: List[DataSource] = []
        for data_source in self.data_sources.values():
            if data_source.instance_key in seen:
                continue
            seen.add(data_source.instance_key)
            result.append(data_source)
        return result


@dataclass
class ShardingSphereRuleMetaData:
    rules: List[Any] = field(default_factory=list)


@dataclass
class ShardingSphereMetaData:
    name: str
    resource: ShardingSphereResource = field(default_factory=ShardingSphereResource)
    rule_meta_data: ShardingSphereRuleMetaData = field(default_factory=ShardingSphereRuleMetaData)
