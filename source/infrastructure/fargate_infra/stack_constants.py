# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

# VPC and networking configuration
PVT_SUBNET_NAME = "Fargate-Private"  # Name for private subnets
PUB_SUBNET_NAME = "Fargate-Public"   # Name for public subnets
VPC_CIDR = "10.8.0.0/16"             # CIDR block for the VPC
CIDR_MASK = 20                       # Subnet mask for subnet CIDRs
MAX_AZS = 2                          # Maximum number of Availability Zones to use
NAT_GATEWAYS = 1                     # Number of NAT Gateways for private subnet internet access

# Fargate task sizing
FARGATE_MIN_MEMORY_MIB = 512         # Smallest task memory, rendered as "0.5GB"
FARGATE_MIN_MEMORY = "0.5GB"
FARGATE_MIN_CPU = 256                # Smallest task CPU (1024 = 1 vCPU)
MIB_PER_GB = 1024

# Largest task Fargate accepts. Not enforced here, ECS rejects anything above it.
FARGATE_MAX_CPU = 4096
FARGATE_MAX_MEMORY_MIB = 30 * MIB_PER_GB

"""
Minimum task CPU for a given task memory, checked in order.
A task whose memory (MiB) is above the threshold needs at least the paired CPU
units. Memory at or below 2048 MiB places no floor on CPU.
"""
CPU_FLOOR_BY_MEMORY_MIB = (
    (16384, 4096),
    (8192, 2048),
    (4096, 1024),
    (2048, 512),
)

# Container option keys read when summing a task's resource requests
CONTAINER_MEMORY_KEY = "memory_limit_mib"
CONTAINER_MEMORY_RESERVATION_KEY = "memory_reservation_mib"
CONTAINER_CPU_KEY = "cpu"

# Default container name when a task definition is built from a single container
DEFAULT_CONTAINER_NAME = "container"

# Options fixed by the Fargate constructs that callers may not supply
RESERVED_TASK_DEFINITION_OPTIONS = ("compatibility", "network_mode")
RESERVED_SERVICE_OPTIONS = (
    "capacity_provider_strategies",
    "assign_public_ip",
    "security_groups",
    "vpc_subnets",
)

# CloudFront metrics
CLOUDFRONT_NAMESPACE = "AWS/CloudFront"  # CloudFront metrics namespace
CLOUDFRONT_GLOBAL_REGION = "Global"      # Only value accepted for the Region dimension
DISTRIBUTION_ID_DIMENSION = "DistributionId"
REGION_DIMENSION = "Region"

# CloudWatch alarm thresholds for the example stack
ERROR_RATE_5XX_THRESHOLD_PCT = 1
TOTAL_ERROR_RATE_THRESHOLD_PCT = 5
ALARM_EVALUATION_PERIODS = 1

# Example service defaults
CONTAINER_PORT = 80
DEFAULT_CONTAINER_IMAGE = "public.ecr.aws/nginx/nginx:latest"
SERVICE_DESIRED_COUNT = 1
