# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, NamedTuple, Optional, Tuple, Union

import fargate_infra.stack_constants as stack_constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerResourceRequest:
    """Resources one container asks for, in MiB and CPU units."""

    memory: Optional[int] = None
    memory_reservation: Optional[int] = None
    cpu: Optional[int] = None

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "ContainerResourceRequest":
        """Read the resource fields out of a container's construct options."""
        if isinstance(options, cls):
            return options
        return cls(
            memory=options.get(stack_constants.CONTAINER_MEMORY_KEY),
            memory_reservation=options.get(stack_constants.CONTAINER_MEMORY_RESERVATION_KEY),
            cpu=options.get(stack_constants.CONTAINER_CPU_KEY),
        )

    @property
    def effective_memory(self) -> int:
        # The soft reservation is what the task must be able to hold
        return self.memory_reservation or self.memory or 0

    @property
    def effective_cpu(self) -> int:
        return self.cpu or 0


class TaskResources(NamedTuple):
    memory: str
    cpu: str


ContainerRequests = Mapping[str, Union[Mapping[str, Any], ContainerResourceRequest]]


def resolve_memory(min_memory: int) -> Tuple[int, str]:
    """
    Smallest Fargate memory size holding min_memory MiB.

    Returns the size in MiB together with the GB string CloudFormation accepts.
    """
    if min_memory <= stack_constants.FARGATE_MIN_MEMORY_MIB:
        return stack_constants.FARGATE_MIN_MEMORY_MIB, stack_constants.FARGATE_MIN_MEMORY

    whole_gb = math.ceil(min_memory / stack_constants.MIB_PER_GB)
    return whole_gb * stack_constants.MIB_PER_GB, f"{whole_gb}GB"


def resolve_cpu(min_cpu: int, memory_mib: int) -> int:
    """
    Smallest power of two CPU units covering min_cpu, raised to the floor
    Fargate requires for memory_mib.

    Values above the largest Fargate size are returned as is.
    """
    needed = math.ceil(max(min_cpu, stack_constants.FARGATE_MIN_CPU))
    cpu = 1 << (needed - 1).bit_length()

    for memory_threshold, cpu_floor in stack_constants.CPU_FLOOR_BY_MEMORY_MIB:
        if memory_mib > memory_threshold:
            return max(cpu, cpu_floor)
    return cpu


def size_task(containers: ContainerRequests) -> TaskResources:
    """
    Compute the memory and CPU for a Fargate task running all of containers.

    Each container contributes its memory reservation (or memory limit when no
    reservation is set) and its CPU units. Containers declaring nothing
    contribute nothing.
    """
    requests = [ContainerResourceRequest.from_options(options) for options in containers.values()]
    min_memory = sum(request.effective_memory for request in requests)
    min_cpu = sum(request.effective_cpu for request in requests)

    memory_mib, memory = resolve_memory(min_memory)
    cpu = resolve_cpu(min_cpu, memory_mib)

    logger.debug(
        "Sized task for %d container(s): requested %d MiB / %d CPU, using %s / %d",
        len(requests), min_memory, min_cpu, memory, cpu,
    )
    if cpu > stack_constants.FARGATE_MAX_CPU or memory_mib > stack_constants.FARGATE_MAX_MEMORY_MIB:
        logger.warning(
            "Task size %s / %d CPU is larger than Fargate supports and will be rejected by ECS",
            memory, cpu,
        )

    return TaskResources(memory=memory, cpu=str(cpu))
