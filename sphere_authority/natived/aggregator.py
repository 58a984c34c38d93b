# sphere_authority/natived/aggregator.py

from __future__ import annotations

import time
from typing import Dict, Iterable, Mapping

from sphere_authority.config.defaults import default, logger
from sphere_authority.exceptions import CatalogQueryError, PrivilegeLoadError
from sphere_authority.metadata.meta_data import ShardingSphereMetaData
from sphere_authority.model.privileges import ShardingSpherePrivileges
from sphere_authority.model.user import Grantee, ShardingSphereUser
from sphere_authority.natived.catalog import PrivilegeRecord
from sphere_authority.natived.planner import InstanceTarget, QueryPlan, build_plan


class PrivilegeAggregator:
    """
    Runs one load pass: plan, query every instance, decode, merge.

    Every configured grantee gets an aggregate, empty if no catalog row
    mentions it.  Rows for anybody else are dropped.  The same privilege
    seen on several rows or instances is granted once; nothing revokes.
    """

    def load(
        self,
        meta_data_map: Mapping[str, ShardingSphereMetaData],
        users: Iterable[ShardingSphereUser],
    ) -> Dict[Grantee, ShardingSpherePrivileges]:
        start = time.time()
        plan = build_plan(meta_data_map, users)
        result: Dict[Grantee, ShardingSpherePrivileges] = {
            grantee: ShardingSpherePrivileges() for grantee in plan.grantees
        }

        if plan.is_empty:
            logger.debug(
                f"[native] Nothing to query ({len(plan.targets)} instance(s), {len(plan.grantees)} user(s))"
            )
        else:
            for target in plan.targets:
                for record in self._load_instance(target, plan):
                    self._fold(result, record)

        for privileges in result.values():
            privileges.freeze()

        if default.IS_SHOW_TIMING:
            logger.info(f"[native] Loaded privileges in {(time.time() - start) * 1000:.1f} ms")
        logger.debug(f"[native] Loaded privileges for {len(result)} grantee(s) from {len(plan.targets)} instance(s)")
        return result

    def _load_instance(self, target: InstanceTarget, plan: QueryPlan):
        data_source = target.data_source
        for query in target.catalog.queries:
            sql = query.render(plan.predicate)
            try:
                frame = data_source.execute_query(sql)
            except PrivilegeLoadError:
                raise
            except Exception as e:
                logger.error(f"[native] {query.name} privilege query failed on {data_source.url}: {e}")
                raise CatalogQueryError(data_source.url, sql, str(e)) from e
            records = query.decode(frame)
            logger.debug(f"[native] {data_source.url}: {len(records)} {query.name} privilege row(s)")
            yield from records

    @staticmethod
    def _fold(result: Dict[Grantee, ShardingSpherePrivileges], record: PrivilegeRecord) -> None:
        target = result.get(record.grantee)
        if target is None:
            logger.debug(f"[native] Ignoring {record.scope} privileges of unconfigured grantee {record.grantee}")
            return
        record.apply_to(target)
