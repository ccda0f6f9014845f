# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import logging

from aws_cdk import App

import fargate_infra.stack_constants as stack_constants
from fargate_infra.fargate_stack import FargateStack

logger = logging.getLogger("cdk-helper")


def build_app(context=None):
    app = App(context=context)

    use_private_subnets = str(app.node.try_get_context("use_private_subnets")).lower() == "true"
    container_image = app.node.try_get_context("container_image") or stack_constants.DEFAULT_CONTAINER_IMAGE
    logger.info("Synthesizing %s (private subnets: %s, image: %s)",
                FargateStack.name, use_private_subnets, container_image)

    FargateStack(
        app,
        FargateStack.name,
        description=FargateStack.description,
        use_private_subnets=use_private_subnets,
        container_image=container_image,
    )
    return app.synth(validate_on_synthesis=True, skip_validation=False)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    build_app()
