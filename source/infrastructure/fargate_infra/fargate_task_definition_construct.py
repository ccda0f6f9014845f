# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

import jsii
from aws_cdk import IStableStringProducer, Lazy, Token
from aws_cdk import aws_ecs as ecs
from constructs import Construct

import fargate_infra.stack_constants as stack_constants
from fargate_infra.exceptions import InvalidArgumentError
from fargate_infra.task_sizing import TaskResources, size_task

from .cluster_construct import FargateCluster

if TYPE_CHECKING:
    from .fargate_service_construct import FargateService

logger = logging.getLogger(__name__)

ContainerOptions = Mapping[str, Any]


def _check_sizable(name: str, options: ContainerOptions) -> None:
    for key in (
        stack_constants.CONTAINER_MEMORY_KEY,
        stack_constants.CONTAINER_MEMORY_RESERVATION_KEY,
        stack_constants.CONTAINER_CPU_KEY,
    ):
        value = options.get(key)
        if value is not None and Token.is_unresolved(value):
            raise InvalidArgumentError(
                f"Container [{name}] has an unresolved {key}, "
                "[memory] and [cpu] must be provided for the task definition"
            )


@jsii.implements(IStableStringProducer)
class _SizedTaskValue:
    """Produces one field of the task size once the construct tree is synthesized."""

    def __init__(self, task_definition: "FargateTaskDefinition", field: str) -> None:
        self._task_definition = task_definition
        self._field = field

    def produce(self) -> Optional[str]:
        return getattr(self._task_definition.compute_resources(), self._field)


class FargateTaskDefinition(Construct):
    def __init__(
            self,
            scope: Construct,
            id: str,
            cluster: FargateCluster,
            container: Optional[ContainerOptions] = None,
            containers: Optional[Mapping[str, ContainerOptions]] = None,
            memory: Optional[Union[int, str]] = None,
            cpu: Optional[Union[int, str]] = None,
            **task_definition_options,
    ) -> None:
        """
        This construct creates an ECS task definition that runs on Fargate.

        Either container (a single container, named "container") or containers
        (container name to container options) must be provided. Container
        options are the keyword arguments of ecs.ContainerDefinitionOptions.

        memory and cpu default to the smallest Fargate size that fits the sum of
        the containers' memory reservations (or limits) and CPU units.
        """
        if not container and not containers:
            raise InvalidArgumentError("Either [container] or [containers] must be provided")
        if container and containers:
            logger.warning("Both [container] and [containers] were provided to %s, using [containers]", id)

        reserved = [key for key in stack_constants.RESERVED_TASK_DEFINITION_OPTIONS if key in task_definition_options]
        if reserved:
            raise InvalidArgumentError(f"Fargate task definitions do not accept {', '.join(reserved)}")

        # Zero or empty sizes are computed, like absent ones
        sized = not memory or not cpu
        resolved_containers = dict(containers or {stack_constants.DEFAULT_CONTAINER_NAME: container})
        if sized:
            for name, options in resolved_containers.items():
                _check_sizable(name, options)

        super().__init__(scope, id)

        self._sized = sized
        self.cluster = cluster
        self.containers: Dict[str, ContainerOptions] = {}
        self.container_definitions: Dict[str, ecs.ContainerDefinition] = {}

        self.task_definition = ecs.TaskDefinition(
            self,
            "TaskDefinition",
            compatibility=ecs.Compatibility.FARGATE,
            network_mode=ecs.NetworkMode.AWS_VPC,
            memory_mib=str(memory) if memory else Lazy.string(_SizedTaskValue(self, "memory")),
            cpu=str(cpu) if cpu else Lazy.string(_SizedTaskValue(self, "cpu")),
            **task_definition_options,
        )

        for name, options in resolved_containers.items():
            self.add_container(name, **options)

    def add_container(self, name: str, **options) -> ecs.ContainerDefinition:
        """
        Adds a container to the task definition. It is included when the task
        size is computed.
        """
        if self._sized:
            _check_sizable(name, options)
        self.containers[name] = options
        self.container_definitions[name] = self.task_definition.add_container(name, **options)
        return self.container_definitions[name]

    def compute_resources(self) -> TaskResources:
        return size_task(self.containers)

    def create_service(self, id: str, **args) -> "FargateService":
        """
        Creates a service with this as its task definition.
        """
        from .fargate_service_construct import FargateService

        return FargateService(self, id, self.cluster, task_definition=self, **args)
