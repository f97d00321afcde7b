import json

import yaml

from zoneplan.tool import _main
from zoneplan.tests.builders import EDGE_ZONE, INFRA_ID, VPC_ID, RegionBuilder, byo_region, byo_subnet_ids, \
    install_config_doc


def _write_inputs(tmp_path, config_doc, region_doc):
    config = tmp_path / "install-config.yaml"
    config.write_text(yaml.safe_dump(config_doc))
    metadata = tmp_path / "metadata.yaml"
    metadata.write_text(yaml.safe_dump(region_doc))
    return str(config), str(metadata)


def test_plan_to_file(tmp_path):
    config, metadata = _write_inputs(
        tmp_path, install_config_doc(edge_zones=[EDGE_ZONE]), RegionBuilder(edge_zones=[EDGE_ZONE]).build())
    output = tmp_path / "plan.json"

    rv = _main(["plan", "-c", config, "-m", metadata, "--infra-id", INFRA_ID, "-o", str(output)])
    assert rv == 0

    doc = json.loads(output.read_text())
    assert doc["vpc"] == {"cidrBlock": "10.0.0.0/16"}
    assert len(doc["subnets"]) == 8
    assert set(doc["subnets"][0]) == {"id", "availabilityZone", "cidrBlock", "isPublic"}
    assert all(s["id"].startswith(f"{INFRA_ID}-subnet-") for s in doc["subnets"])


def test_plan_byo_yaml_stdout(tmp_path, capsys):
    config, metadata = _write_inputs(
        tmp_path, install_config_doc(subnets=byo_subnet_ids()), byo_region().build())

    rv = _main(["plan", "-c", config, "-m", metadata, "-i", INFRA_ID, "-f", "yaml"])
    assert rv == 0

    doc = yaml.safe_load(capsys.readouterr().out)
    assert doc["vpc"] == {"id": VPC_ID}
    assert sorted(s["id"] for s in doc["subnets"]) == sorted(byo_subnet_ids())


def test_plan_table(tmp_path, capsys):
    config, metadata = _write_inputs(tmp_path, install_config_doc(publish="Internal"), RegionBuilder().build())

    assert _main(["plan", "-c", config, "-m", metadata, "-i", INFRA_ID, "-f", "table"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("VPC: 10.0.0.0/16")
    assert "10.0.128.0/18" in out


def test_plan_failure_writes_nothing(tmp_path):
    config, metadata = _write_inputs(tmp_path, install_config_doc(cidr="10.0.0.0/26"), RegionBuilder().build())
    output = tmp_path / "plan.json"

    rv = _main(["plan", "-c", config, "-m", metadata, "-i", INFRA_ID, "-o", str(output)])
    assert rv == 1
    assert not output.exists()


def test_plan_invalid_config(tmp_path):
    config, metadata = _write_inputs(tmp_path, install_config_doc(publish="Sometimes"), RegionBuilder().build())
    assert _main(["plan", "-c", config, "-m", metadata, "-i", INFRA_ID]) == 1


def test_zones(tmp_path, capsys):
    config, metadata = _write_inputs(
        tmp_path, install_config_doc(control_plane_zones=["us-east-1a"], edge_zones=[EDGE_ZONE]),
        RegionBuilder(edge_zones=[EDGE_ZONE]).build())

    assert _main(["zones", "-c", config, "-m", metadata]) == 0
    lines = capsys.readouterr().out.splitlines()
    control_plane = [l for l in lines if l.startswith("control-plane")][0]
    compute = [l for l in lines if l.startswith("compute")][0]
    edge = [l for l in lines if l.startswith("edge")][0]
    assert control_plane.split()[1:] == ["us-east-1a"]
    assert compute.split()[1:] == ["us-east-1a,", "us-east-1b,", "us-east-1c"]
    assert edge.split()[1:] == [EDGE_ZONE]


def test_classify(tmp_path, capsys):
    metadata = tmp_path / "metadata.yaml"
    metadata.write_text(yaml.safe_dump(byo_region(edge=True).build()))

    assert _main(["classify", "-m", str(metadata), "subnet-private-0", "subnet-public-1", "subnet-edge-0"]) == 0
    out = capsys.readouterr().out
    assert f"VPC: {VPC_ID}" in out
    rows = {l.split()[0]: l.split() for l in out.splitlines() if l.startswith("subnet-")}
    assert rows["subnet-private-0"][1] == "private"
    assert rows["subnet-public-1"][1] == "public"
    assert rows["subnet-edge-0"][1:4] == ["edge", EDGE_ZONE, "local-zone"]


def test_classify_missing_route_table(tmp_path):
    region = RegionBuilder().add_subnet("subnet-1", "us-east-1a", "10.0.1.0/24")
    metadata = tmp_path / "metadata.yaml"
    metadata.write_text(yaml.safe_dump(region.build()))
    assert _main(["classify", "-m", str(metadata), "subnet-1"]) == 1


def test_instance_types(capsys):
    assert _main(["instance_types", "-a", "arm64"]) == 0
    assert capsys.readouterr().out.split() == ["m6g.xlarge"]
