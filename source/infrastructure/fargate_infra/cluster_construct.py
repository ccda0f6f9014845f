# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import List, Optional

from aws_cdk import aws_ec2 as ec2
from aws_cdk import aws_ecs as ecs
from constructs import Construct

import fargate_infra.stack_constants as stack_constants


class FargateCluster(Construct):
    def __init__(
            self,
            scope: Construct,
            id: str,
            vpc: Optional[ec2.IVpc] = None,
            use_private_subnets: bool = False,
            **cluster_options,
    ) -> None:
        """
        This construct creates the ECS cluster Fargate tasks run in, along with
        the security group their network interfaces use.

        Tasks are placed in the private subnets of the VPC when
        use_private_subnets is set, otherwise in its public subnets.
        """
        super().__init__(scope, id)

        self.use_private_subnets = use_private_subnets
        self.vpc = vpc or ec2.Vpc(
            self,
            "Vpc",
            ip_addresses=ec2.IpAddresses.cidr(stack_constants.VPC_CIDR),
            max_azs=stack_constants.MAX_AZS,
            nat_gateways=stack_constants.NAT_GATEWAYS,
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name=stack_constants.PUB_SUBNET_NAME,
                    subnet_type=ec2.SubnetType.PUBLIC,
                    cidr_mask=stack_constants.CIDR_MASK,
                ),
                ec2.SubnetConfiguration(
                    name=stack_constants.PVT_SUBNET_NAME,
                    subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS,
                    cidr_mask=stack_constants.CIDR_MASK,
                ),
            ],
        )

        self.ecs_cluster = ecs.Cluster(self, "Cluster", vpc=self.vpc, **cluster_options)

        self.instance_security_group = ec2.SecurityGroup(
            self,
            "InstanceSecurityGroup",
            vpc=self.vpc,
            description="Security group for Fargate task network interfaces",
            allow_all_outbound=True,
        )

    @property
    def subnets(self) -> List[ec2.ISubnet]:
        if self.use_private_subnets:
            return self.vpc.private_subnets
        return self.vpc.public_subnets

    @property
    def subnet_ids(self) -> List[str]:
        return [subnet.subnet_id for subnet in self.subnets]
