# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest
from aws_cdk import aws_ec2 as ec2
from aws_cdk import aws_ecs as ecs
from aws_cdk.assertions import Template

import fargate_infra.stack_constants as stack_constants
from fargate_infra.exceptions import InvalidArgumentError
from fargate_infra.fargate_service_construct import FargateService
from fargate_infra.fargate_task_definition_construct import FargateTaskDefinition

SERVICE = "AWS::ECS::Service"


@pytest.fixture
def task_definition_args(image):
    return {"container": {"image": image, "memory_limit_mib": 1024, "cpu": 512}}


def network_configuration(stack, cluster, assign_public_ip):
    return {
        "AwsvpcConfiguration": {
            "AssignPublicIp": assign_public_ip,
            "SecurityGroups": [stack.resolve(cluster.instance_security_group.security_group_id)],
            "Subnets": [stack.resolve(subnet_id) for subnet_id in cluster.subnet_ids],
        }
    }


def test_service_from_task_definition_args(stack, cluster, task_definition_args):
    service = FargateService(stack, "TestService", cluster, task_definition_args=task_definition_args)

    assert isinstance(service.task_definition, FargateTaskDefinition)
    assert service.cluster is cluster

    template = Template.from_stack(stack)
    template.resource_count_is("AWS::ECS::TaskDefinition", 1)
    template.has_resource_properties("AWS::ECS::TaskDefinition", {"Cpu": "512", "Memory": "1GB"})
    template.has_resource_properties(SERVICE, {
        "LaunchType": "FARGATE",
        "NetworkConfiguration": network_configuration(stack, cluster, "ENABLED"),
    })


def test_service_in_private_subnets(stack, private_cluster, task_definition_args):
    FargateService(stack, "TestService", private_cluster, task_definition_args=task_definition_args)

    Template.from_stack(stack).has_resource_properties(SERVICE, {
        "LaunchType": "FARGATE",
        "NetworkConfiguration": network_configuration(stack, private_cluster, "DISABLED"),
    })


def test_service_from_task_definition(stack, cluster, task_definition_args):
    task_definition = FargateTaskDefinition(stack, "TestTask", cluster, **task_definition_args)
    service = FargateService(stack, "TestService", cluster, task_definition=task_definition)

    assert service.task_definition is task_definition
    Template.from_stack(stack).resource_count_is("AWS::ECS::TaskDefinition", 1)


def test_task_definition_takes_precedence_over_args(stack, cluster, task_definition_args):
    task_definition = FargateTaskDefinition(stack, "TestTask", cluster, **task_definition_args)
    service = FargateService(
        stack, "TestService", cluster,
        task_definition=task_definition,
        task_definition_args=task_definition_args,
    )

    assert service.task_definition is task_definition
    Template.from_stack(stack).resource_count_is("AWS::ECS::TaskDefinition", 1)


def test_requires_task_definition_or_args(stack, cluster):
    with pytest.raises(InvalidArgumentError):
        FargateService(stack, "TestService", cluster)

    Template.from_stack(stack).resource_count_is(SERVICE, 0)


def test_task_definition_args_are_validated(stack, cluster):
    with pytest.raises(InvalidArgumentError):
        FargateService(stack, "TestService", cluster, task_definition_args={"memory": 1024})


@pytest.mark.parametrize(
    "reserved",
    [
        {"assign_public_ip": False},
        {"vpc_subnets": ec2.SubnetSelection(subnet_type=ec2.SubnetType.PUBLIC)},
        {"capacity_provider_strategies": [ecs.CapacityProviderStrategy(capacity_provider="FARGATE_SPOT", weight=1)]},
    ]
)
def test_fixed_options_are_rejected(stack, cluster, task_definition_args, reserved):
    with pytest.raises(InvalidArgumentError):
        FargateService(stack, "TestService", cluster, task_definition_args=task_definition_args, **reserved)


def test_service_options_pass_through(stack, cluster, task_definition_args):
    FargateService(
        stack, "TestService", cluster,
        task_definition_args=task_definition_args,
        desired_count=3,
        service_name="test-service",
    )

    Template.from_stack(stack).has_resource_properties(SERVICE, {
        "DesiredCount": 3,
        "ServiceName": "test-service",
    })


@pytest.mark.parametrize("option", stack_constants.RESERVED_SERVICE_OPTIONS)
def test_every_reserved_option_is_rejected(stack, cluster, task_definition_args, option):
    with pytest.raises(InvalidArgumentError):
        FargateService(stack, "TestService", cluster, task_definition_args=task_definition_args, **{option: None})
