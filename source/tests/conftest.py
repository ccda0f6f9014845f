# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import os
import pathlib
import sys

import pytest
from aws_cdk import App, Stack
from aws_cdk import aws_ecs as ecs

current_dir = pathlib.Path(__file__).parent.absolute()
project_root = str(current_dir.parent)

infrastructure_path = os.path.join(project_root, 'infrastructure')

sys.path.append(infrastructure_path)

from fargate_infra.cluster_construct import FargateCluster  # noqa: E402


@pytest.fixture
def app():
    return App()


@pytest.fixture
def stack(app):
    return Stack(app, "TestStack")


@pytest.fixture
def cluster(stack):
    return FargateCluster(stack, "TestCluster")


@pytest.fixture
def private_cluster(stack):
    return FargateCluster(stack, "TestPrivateCluster", use_private_subnets=True)


@pytest.fixture
def image():
    return ecs.ContainerImage.from_registry("public.ecr.aws/nginx/nginx:latest")
