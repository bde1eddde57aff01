"""Live lookup of a load balancer and the EC2 instances registered behind it."""
from __future__ import annotations

import logging
from typing import List

import boto3
from botocore.exceptions import ClientError, EndpointConnectionError

from .diagram import WebTopology
from .errors import DiscoveryError
from .utils import safe_paginate, unique_in_order

logger = logging.getLogger(__name__)

INSTANCE_TARGET_TYPE = "instance"


def _error_code(exc: ClientError) -> str:
    return (exc.response.get("Error") or {}).get("Code", "")


def find_load_balancer_arn(elbv2, load_balancer_name: str) -> str:
    """Return the ARN of the load balancer called ``load_balancer_name``."""

    try:
        load_balancers = list(
            safe_paginate(
                elbv2,
                "describe_load_balancers",
                "LoadBalancers",
                Names=[load_balancer_name],
            )
        )
    except ClientError as exc:
        if _error_code(exc) == "LoadBalancerNotFound":
            raise DiscoveryError(
                f"Load balancer '{load_balancer_name}' was not found"
            ) from exc
        raise DiscoveryError(f"Failed to describe load balancers: {exc}") from exc
    except EndpointConnectionError as exc:
        raise DiscoveryError(f"Failed to describe load balancers: {exc}") from exc

    if not load_balancers:
        raise DiscoveryError(f"Load balancer '{load_balancer_name}' was not found")
    return load_balancers[0]["LoadBalancerArn"]


def list_instance_targets(elbv2, load_balancer_arn: str) -> List[str]:
    """Return instance IDs registered in any target group of the load balancer."""

    instance_ids: List[str] = []
    try:
        target_groups = list(
            safe_paginate(
                elbv2,
                "describe_target_groups",
                "TargetGroups",
                LoadBalancerArn=load_balancer_arn,
            )
        )
        for target_group in target_groups:
            if target_group.get("TargetType", INSTANCE_TARGET_TYPE) != INSTANCE_TARGET_TYPE:
                logger.debug(
                    "Skipping target group %s with target type %s",
                    target_group.get("TargetGroupName"),
                    target_group.get("TargetType"),
                )
                continue
            descriptions = safe_paginate(
                elbv2,
                "describe_target_health",
                "TargetHealthDescriptions",
                TargetGroupArn=target_group["TargetGroupArn"],
            )
            for description in descriptions:
                target_id = (description.get("Target") or {}).get("Id")
                if target_id:
                    instance_ids.append(target_id)
    except (ClientError, EndpointConnectionError) as exc:
        raise DiscoveryError(f"Failed to describe load balancer targets: {exc}") from exc

    return unique_in_order(instance_ids)


def discover_web_topology(
    session: boto3.session.Session, load_balancer_name: str
) -> WebTopology:
    """Look up ``load_balancer_name`` and the instances it routes to."""

    elbv2 = session.client("elbv2")
    arn = find_load_balancer_arn(elbv2, load_balancer_name)
    logger.info("Found load balancer %s", arn)
    instance_ids = list_instance_targets(elbv2, arn)
    logger.info(
        "Load balancer %s routes to %d instance(s)", load_balancer_name, len(instance_ids)
    )
    return WebTopology(
        load_balancer_name=load_balancer_name, instance_ids=tuple(instance_ids)
    )


__all__ = ["discover_web_topology", "find_load_balancer_arn", "list_instance_targets"]
