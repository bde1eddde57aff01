"""CDK stack declaring the load-balanced web server and its diagram output."""
from __future__ import annotations

from aws_cdk import CfnOutput, Stack
from aws_cdk import aws_ec2 as ec2
from aws_cdk import aws_elasticloadbalancingv2 as elbv2
from aws_cdk import aws_elasticloadbalancingv2_targets as elbv2_targets
from constructs import Construct

from .core import build_web_server_diagram
from .diagram import DEFAULT_TITLE, DrawioOptions

DEFAULT_VPC_CIDR = "172.16.0.0/16"
DEFAULT_MAX_AZS = 2
DEFAULT_INSTANCE_TYPE = "t2.micro"


class WebServerStack(Stack):
    """VPC with public and isolated subnets, one EC2 web server behind an ALB.

    The instance lives in the isolated subnets and only accepts HTTP from the
    load balancer's security group. The ``DrawioCsv`` output carries a draw.io
    CSV diagram of the load balancer and instance.
    """

    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        vpc_cidr = self.node.try_get_context("vpc_cidr") or DEFAULT_VPC_CIDR
        max_azs = int(self.node.try_get_context("max_azs") or DEFAULT_MAX_AZS)
        instance_type = self.node.try_get_context("instance_type") or DEFAULT_INSTANCE_TYPE
        diagram_title = self.node.try_get_context("diagram_title") or DEFAULT_TITLE

        self.vpc = ec2.Vpc(
            self,
            "WebVpc",
            vpc_name="web-vpc",
            ip_addresses=ec2.IpAddresses.cidr(vpc_cidr),
            nat_gateways=0,
            max_azs=max_azs,
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name="Public",
                    subnet_type=ec2.SubnetType.PUBLIC,
                    cidr_mask=24,
                ),
                ec2.SubnetConfiguration(
                    name="Private",
                    subnet_type=ec2.SubnetType.PRIVATE_ISOLATED,
                    cidr_mask=24,
                ),
            ],
            # remove all rules from the default security group
            restrict_default_security_group=True,
        )

        # --- Security groups ---
        self.alb_security_group = ec2.SecurityGroup(
            self,
            "AlbSg",
            vpc=self.vpc,
            allow_all_outbound=True,
            description="security group for alb",
        )
        self.alb_security_group.add_ingress_rule(
            peer=ec2.Peer.any_ipv4(),
            connection=ec2.Port.tcp(80),
            description="allow http traffic from anyone",
        )

        self.web_security_group = ec2.SecurityGroup(
            self,
            "WebEc2Sg",
            vpc=self.vpc,
            allow_all_outbound=True,
            description="security group for a web server",
        )
        self.web_security_group.connections.allow_from(
            self.alb_security_group,
            ec2.Port.tcp(80),
            "allow http traffic from alb",
        )

        # --- Web server ---
        self.instance = ec2.Instance(
            self,
            "WebEc2",
            instance_name="web-ec2",
            instance_type=ec2.InstanceType(instance_type),
            machine_image=ec2.MachineImage.latest_amazon_linux2023(),
            vpc=self.vpc,
            vpc_subnets=ec2.SubnetSelection(subnet_type=ec2.SubnetType.PRIVATE_ISOLATED),
            security_group=self.web_security_group,
            block_devices=[
                ec2.BlockDevice(
                    device_name="/dev/xvda",
                    volume=ec2.BlockDeviceVolume.ebs(8, encrypted=True),
                )
            ],
            ssm_session_permissions=True,
            propagate_tags_to_volume_on_creation=True,
        )

        # --- Load balancer ---
        self.load_balancer = elbv2.ApplicationLoadBalancer(
            self,
            "Alb",
            internet_facing=True,
            vpc=self.vpc,
            vpc_subnets=ec2.SubnetSelection(subnets=self.vpc.public_subnets),
            security_group=self.alb_security_group,
        )
        listener = self.load_balancer.add_listener(
            "HttpListener",
            port=80,
            protocol=elbv2.ApplicationProtocol.HTTP,
        )
        listener.add_targets(
            "WebEc2Target",
            port=80,
            targets=[elbv2_targets.InstanceTarget(self.instance)],
        )

        # --- Outputs ---
        CfnOutput(
            self,
            "TestCommand",
            value=f"curl http://{self.load_balancer.load_balancer_dns_name}",
        )
        CfnOutput(
            self,
            "DrawioCsv",
            value=build_web_server_diagram(
                self.load_balancer.load_balancer_name,
                self.instance.instance_id,
                DrawioOptions(title=diagram_title),
            ),
        )


__all__ = ["WebServerStack"]
