# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""
CloudWatch metrics published by CloudFront.

CloudFront metrics live in the AWS/CloudFront namespace and can be filtered on
two dimensions:

1. "DistributionId": the ID of the distribution to report on.
2. "Region": must be "Global". This is not the region the metrics are stored
   in, which is always us-east-1.

See https://docs.aws.amazon.com/AmazonCloudFront/latest/DeveloperGuide/monitoring-using-cloudwatch.html
"""

from typing import Any, Dict, Optional, Tuple

from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_cloudwatch as cloudwatch
from aws_cdk.aws_cloudwatch import Unit

import fargate_infra.stack_constants as stack_constants
from fargate_infra.exceptions import InvalidArgumentError

REQUESTS = "Requests"
BYTES_DOWNLOADED = "BytesDownloaded"
BYTES_UPLOADED = "BytesUploaded"
TOTAL_ERROR_RATE = "TotalErrorRate"
ERROR_RATE_4XX = "4xxErrorRate"
ERROR_RATE_5XX = "5xxErrorRate"

# Default statistic and unit for each metric CloudFront publishes
CLOUDFRONT_METRICS: Dict[str, Tuple[str, Unit]] = {
    REQUESTS: ("Sum", Unit.NONE),
    BYTES_DOWNLOADED: ("Sum", Unit.NONE),
    BYTES_UPLOADED: ("Sum", Unit.NONE),
    TOTAL_ERROR_RATE: ("Average", Unit.PERCENT),
    ERROR_RATE_4XX: ("Average", Unit.PERCENT),
    ERROR_RATE_5XX: ("Average", Unit.PERCENT),
}


def metric_props(
    metric_name: str,
    /,
    distribution: Optional[cloudfront.IDistribution] = None,
    region: Optional[str] = None,
    **change: Any,
) -> Dict[str, Any]:
    """
    Build the keyword arguments of a CloudFront cloudwatch.Metric.

    Keys in change override the metric's default statistic and unit. A
    dimensions_map in change is kept, with the DistributionId and Region
    dimensions set on top of it when distribution or region are given.
    """
    if metric_name not in CLOUDFRONT_METRICS:
        raise InvalidArgumentError(f"Unknown CloudFront metric: {metric_name}")

    statistic, unit = CLOUDFRONT_METRICS[metric_name]
    change.pop("namespace", None)
    change.pop("metric_name", None)
    dimensions = dict(change.pop("dimensions_map", None) or {})
    if distribution is not None:
        dimensions[stack_constants.DISTRIBUTION_ID_DIMENSION] = distribution.distribution_id
    if region is not None:
        dimensions[stack_constants.REGION_DIMENSION] = region

    props = {"statistic": statistic, "unit": unit}
    props.update(change)
    props.update(
        namespace=stack_constants.CLOUDFRONT_NAMESPACE,
        metric_name=metric_name,
        dimensions_map=dimensions,
    )
    return props


def metric(metric_name: str, /, **change: Any) -> cloudwatch.Metric:
    """Create an AWS/CloudFront metric named metric_name."""
    return cloudwatch.Metric(**metric_props(metric_name, **change))


def requests(**change: Any) -> cloudwatch.Metric:
    """Requests for all HTTP methods over HTTP and HTTPS. Sum, no unit."""
    return metric(REQUESTS, **change)


def bytes_downloaded(**change: Any) -> cloudwatch.Metric:
    """Bytes downloaded by viewers for GET, HEAD and OPTIONS requests. Sum, no unit."""
    return metric(BYTES_DOWNLOADED, **change)


def bytes_uploaded(**change: Any) -> cloudwatch.Metric:
    """Bytes uploaded to the origin with POST and PUT requests. Sum, no unit."""
    return metric(BYTES_UPLOADED, **change)


def total_error_rate(**change: Any) -> cloudwatch.Metric:
    """Percentage of requests answered with a 4xx or 5xx status. Average, percent."""
    return metric(TOTAL_ERROR_RATE, **change)


def error_rate_4xx(**change: Any) -> cloudwatch.Metric:
    """Percentage of requests answered with a 4xx status. Average, percent."""
    return metric(ERROR_RATE_4XX, **change)


def error_rate_5xx(**change: Any) -> cloudwatch.Metric:
    """Percentage of requests answered with a 5xx status. Average, percent."""
    return metric(ERROR_RATE_5XX, **change)
