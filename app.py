#!/usr/bin/env python3
"""CDK application entry point for the web server stack."""
import aws_cdk as cdk

from aws_web_topology.stack import WebServerStack

app = cdk.App()

WebServerStack(
    app,
    "WebServerStack",
    tags={
        "Project": "aws-web-topology",
    },
)

app.synth()
