# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from aws_cdk import (
    CfnOutput,
    Stack,
    aws_cloudfront as cloudfront,
    aws_cloudfront_origins as origins,
    aws_cloudwatch as cloudwatch,
    aws_ecs as ecs,
    aws_elasticloadbalancingv2 as elbv2,
)
from constructs import Construct

import fargate_infra.cloudfront_metrics as cloudfront_metrics
import fargate_infra.stack_constants as stack_constants

from .cluster_construct import FargateCluster
from .fargate_service_construct import FargateService


class FargateStack(Stack):
    name = "fargate-cdn-service"
    description = "Fargate service behind a CloudFront distribution"

    def __init__(
            self,
            scope: Construct,
            construct_id: str,
            use_private_subnets: bool = False,
            container_image: str = stack_constants.DEFAULT_CONTAINER_IMAGE,
            **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.cluster = FargateCluster(self, "Cluster", use_private_subnets=use_private_subnets)

        self.service = FargateService(
            self,
            "WebService",
            self.cluster,
            task_definition_args={
                "container": {
                    "image": ecs.ContainerImage.from_registry(container_image),
                    "memory_reservation_mib": 256,
                    "port_mappings": [ecs.PortMapping(container_port=stack_constants.CONTAINER_PORT)],
                },
            },
            desired_count=stack_constants.SERVICE_DESIRED_COUNT,
        )

        alb = elbv2.ApplicationLoadBalancer(
            self,
            "WebServiceALB",
            vpc=self.cluster.vpc,
            internet_facing=True,
        )
        listener = alb.add_listener("HTTPListener", port=80, open=True)
        listener.add_targets(
            "WebServiceTarget",
            port=stack_constants.CONTAINER_PORT,
            protocol=elbv2.ApplicationProtocol.HTTP,
            targets=[self.service.service],
        )

        self.distribution = cloudfront.Distribution(
            self,
            "Distribution",
            default_behavior=cloudfront.BehaviorOptions(
                origin=origins.LoadBalancerV2Origin(
                    alb,
                    protocol_policy=cloudfront.OriginProtocolPolicy.HTTP_ONLY,
                ),
                viewer_protocol_policy=cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
            ),
        )

        self._create_cloudfront_alarms()

        CfnOutput(
            self,
            "DistributionDomainName",
            value=self.distribution.distribution_domain_name,
            description="CloudFront domain name of the service",
        )

    def _create_cloudfront_alarms(self) -> None:
        dimensions = {
            "distribution": self.distribution,
            "region": stack_constants.CLOUDFRONT_GLOBAL_REGION,
        }

        self.error_rate_5xx_alarm = cloudfront_metrics.error_rate_5xx(**dimensions).create_alarm(
            self,
            "CloudFront5xxErrorRateAlarm",
            threshold=stack_constants.ERROR_RATE_5XX_THRESHOLD_PCT,
            evaluation_periods=stack_constants.ALARM_EVALUATION_PERIODS,
            comparison_operator=cloudwatch.ComparisonOperator.GREATER_THAN_THRESHOLD,
            treat_missing_data=cloudwatch.TreatMissingData.NOT_BREACHING,
        )

        self.total_error_rate_alarm = cloudfront_metrics.total_error_rate(**dimensions).create_alarm(
            self,
            "CloudFrontTotalErrorRateAlarm",
            threshold=stack_constants.TOTAL_ERROR_RATE_THRESHOLD_PCT,
            evaluation_periods=stack_constants.ALARM_EVALUATION_PERIODS,
            comparison_operator=cloudwatch.ComparisonOperator.GREATER_THAN_THRESHOLD,
            treat_missing_data=cloudwatch.TreatMissingData.NOT_BREACHING,
        )
