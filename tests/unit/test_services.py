"""
Unit tests for service URL resolution
"""

import asyncio

import pytest

from jx_dashboard.collectors.base import RBACError
from jx_dashboard.models import IngressRecord, IngressRule, ServicePort, ServiceRecord
from jx_dashboard.services import find_service_url, ingress_url, load_balancer_url

from fakes import FakeKubectlClient, ingress_doc, service_doc

NAME = "jx-pipelines-visualizer"


def resolve(client):
    return asyncio.run(find_service_url(client, NAME))


class TestFindServiceURL:
    """Tests for the resolution order"""

    def test_annotation_wins_over_ingress(self):
        client = FakeKubectlClient(objects={
            ("service", NAME): service_doc(annotations={"fabric8.io/exposeUrl": "https://from-annotation"}),
            ("ingress", NAME): ingress_doc(host="from-ingress"),
        })
        assert resolve(client) == "https://from-annotation"
        assert client.requested("ingress") == []

    def test_jenkins_x_annotation(self):
        client = FakeKubectlClient(objects={
            ("service", NAME): service_doc(annotations={"jenkins-x.io/exposeUrl": "http://jx"}),
        })
        assert resolve(client) == "http://jx"

    def test_ingress_used_when_no_annotation(self):
        client = FakeKubectlClient(objects={
            ("service", NAME): service_doc(),
            ("ingress", NAME): ingress_doc(host="dashboard.example.com", tls=True),
        })
        assert resolve(client) == "https://dashboard.example.com"

    def test_ingress_without_service(self):
        client = FakeKubectlClient(objects={
            ("ingress", NAME): ingress_doc(host="dashboard.example.com"),
        })
        assert resolve(client) == "http://dashboard.example.com"

    def test_load_balancer_fallback(self):
        client = FakeKubectlClient(objects={
            ("service", NAME): service_doc(type="LoadBalancer", lb_ip="34.1.2.3", port=8080),
        })
        assert resolve(client) == "http://34.1.2.3:8080"

    def test_nothing_exposed_returns_empty(self):
        client = FakeKubectlClient(objects={("service", NAME): service_doc()})
        assert resolve(client) == ""

    def test_access_errors_propagate(self):
        client = FakeKubectlClient(errors={("service", NAME): RBACError("forbidden")})
        with pytest.raises(RBACError):
            resolve(client)


class TestIngressURL:
    """Tests for building a URL from an Ingress"""

    def test_path_appended(self):
        ingress = IngressRecord(name="d", rules=[IngressRule(host="h.io", path="/dashboard")])
        assert ingress_url(ingress) == "http://h.io/dashboard"

    def test_root_path_ignored(self):
        ingress = IngressRecord(name="d", rules=[IngressRule(host="h.io", path="/")])
        assert ingress_url(ingress) == "http://h.io"

    def test_rules_without_host_skipped(self):
        ingress = IngressRecord(
            name="d",
            rules=[IngressRule(path="/x"), IngressRule(host="h.io")],
            tls_hosts=["h.io"],
        )
        assert ingress_url(ingress) == "https://h.io"

    def test_no_rules(self):
        assert ingress_url(IngressRecord(name="d")) == ""


class TestLoadBalancerURL:
    """Tests for building a URL from a LoadBalancer Service"""

    def test_default_http_port_omitted(self):
        service = ServiceRecord(
            name="d", type="LoadBalancer",
            ports=[ServicePort(port=80)], load_balancer_addresses=["lb.example.com"],
        )
        assert load_balancer_url(service) == "http://lb.example.com"

    def test_https_port(self):
        service = ServiceRecord(
            name="d", type="LoadBalancer",
            ports=[ServicePort(port=443)], load_balancer_addresses=["1.2.3.4"],
        )
        assert load_balancer_url(service) == "https://1.2.3.4"

    def test_ipv6_address_bracketed(self):
        service = ServiceRecord(
            name="d", type="LoadBalancer",
            ports=[ServicePort(port=8080)], load_balancer_addresses=["2001:db8::1"],
        )
        assert load_balancer_url(service) == "http://[2001:db8::1]:8080"

    def test_cluster_ip_service_has_no_url(self):
        service = ServiceRecord(name="d", load_balancer_addresses=["1.2.3.4"])
        assert load_balancer_url(service) == ""
