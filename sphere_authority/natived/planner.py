# sphere_authority/natived/planner.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Tuple

from sqlglot import exp

from sphere_authority.exceptions import UnsupportedDatabaseError
from sphere_authority.metadata.data_source import DataSource
from sphere_authority.metadata.meta_data import ShardingSphereMetaData
from sphere_authority.model.user import Grantee, ShardingSphereUser
from sphere_authority.natived.catalog import PrivilegeCatalog, find_catalog


@dataclass(frozen=True)
class InstanceTarget:
    data_source: DataSource
    catalog: PrivilegeCatalog


@dataclass(frozen=True)
class QueryPlan:
    targets: Tuple[InstanceTarget, ...]
    predicate: str
    grantees: Tuple[Grantee, ...]

    @property
    def is_empty(self) -> bool:
        """Nothing to query: no instance, or no user to ask about."""
        return not self.targets or not self.predicate


def sql_string(value: str) -> str:
    """Render *value* as a MySQL string literal."""
    return exp.Literal.string(value).sql(dialect="mysql")


def distinct_grantees(users: Iterable[ShardingSphereUser]) -> Tuple[Grantee, ...]:
    return tuple(dict.fromkeys(user.grantee for user in users))


def build_scoping_predicate(grantees: Iterable[Grantee]) -> str:
    """``('root', 'localhost'), ('app', '%')`` for every grantee; empty when there are none."""
    return ", ".join(
        f"({sql_string(g.username)}, {sql_string(g.hostname)})" for g in grantees
    )


def plan_instances(meta_data_map: Mapping[str, ShardingSphereMetaData]) -> List[InstanceTarget]:
    """
    Every instance data source of every logical database, paired with the
    catalog that describes its privilege tables.  Instances shared by
    several logical databases are listed once per database.
    """
    targets: List[InstanceTarget] = []
    for meta_data in meta_data_map.values():
        for data_source in meta_data.resource.all_instance_data_sources():
            catalog = find_catalog(data_source.database_type)
            if catalog is None:
                raise UnsupportedDatabaseError(data_source.database_type, data_source.url)
            targets.append(InstanceTarget(data_source, catalog))
    return targets


def build_plan(
    meta_data_map: Mapping[str, ShardingSphereMetaData],
    users: Iterable[ShardingSphereUser],
) -> QueryPlan:
    grantees = distinct_grantees(users)
    return QueryPlan(
        targets=tuple(plan_instances(meta_data_map)),
        predicate=build_scoping_predicate(grantees),
        grantees=grantees,
    )
