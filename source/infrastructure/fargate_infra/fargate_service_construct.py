# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
from typing import Any, Mapping, Optional

from aws_cdk import aws_ec2 as ec2
from aws_cdk import aws_ecs as ecs
from constructs import Construct

import fargate_infra.stack_constants as stack_constants
from fargate_infra.exceptions import InvalidArgumentError

from .cluster_construct import FargateCluster
from .fargate_task_definition_construct import FargateTaskDefinition

logger = logging.getLogger(__name__)


class FargateService(Construct):
    def __init__(
            self,
            scope: Construct,
            id: str,
            cluster: FargateCluster,
            task_definition: Optional[FargateTaskDefinition] = None,
            task_definition_args: Optional[Mapping[str, Any]] = None,
            **service_options,
    ) -> None:
        """
        This construct creates an ECS service running its tasks on Fargate.

        Either task_definition or task_definition_args (the keyword arguments of
        FargateTaskDefinition) must be provided. Networking follows the
        cluster: tasks get a public IP only when the cluster does not use
        private subnets, and always use the cluster's security group.
        """
        if not task_definition and not task_definition_args:
            raise InvalidArgumentError("Either [taskDefinition] or [taskDefinitionArgs] must be provided")
        if task_definition and task_definition_args:
            logger.warning(
                "Both [taskDefinition] and [taskDefinitionArgs] were provided to %s, using [taskDefinition]", id
            )

        reserved = [key for key in stack_constants.RESERVED_SERVICE_OPTIONS if key in service_options]
        if reserved:
            raise InvalidArgumentError(f"Fargate services do not accept {', '.join(reserved)}")

        super().__init__(scope, id)

        self.cluster = cluster
        self.task_definition = task_definition or FargateTaskDefinition(
            self, "TaskDefinition", cluster, **task_definition_args
        )

        # Without capacity provider strategies the service launches as FARGATE
        self.service = ecs.FargateService(
            self,
            "Service",
            cluster=cluster.ecs_cluster,
            task_definition=self.task_definition.task_definition,
            assign_public_ip=not cluster.use_private_subnets,
            security_groups=[cluster.instance_security_group],
            vpc_subnets=ec2.SubnetSelection(subnets=cluster.subnets),
            **service_options,
        )

        # Store the service name for use in metrics
        self.service_name = self.service.service_name
