"""
Step definitions for DNS Migration Manager integration tests.
"""

import yaml
from behave import given, when, then

from dns_migration_manager.cli.main import load_records_file
from dns_migration_manager.core.dns_manager import DNSManager
from dns_migration_manager.core.models import RawAnswer, RecordType, Zone


@given("the DNS Migration Manager is configured with the mock provider")
def step_impl(context):
    """Configure the DNS Migration Manager with the mock provider."""
    context.dns_manager = DNSManager(context.test_config, probe=context.probe)
    context.provider = context.dns_manager.dns_client.provider
    assert context.dns_manager is not None
    assert context.dns_manager.dns_client is not None


@given('the public resolver answers for "{domain}":')
def step_impl(context, domain):
    """Script the resolver answers seen by detection and propagation checks."""
    for row in context.table:
        record_type = RecordType.parse(row["type"])
        key = (row["name"], record_type.value)
        answer = RawAnswer(data=row["data"], type_code=record_type.code, ttl=int(row["ttl"]))
        context.probe.answers.setdefault(key, []).append(answer)


@given('a zone named "{name}" already exists')
def step_impl(context, name):
    context.zone = context.dns_manager.create_zone(name)


@given("the zone is active")
def step_impl(context):
    context.zone = context.provider.set_zone_status(context.zone.id, "active")


@given('the zone contains an A record "{name}" pointing to "{content}"')
def step_impl(context, name, content):
    context.dns_manager.create_record(
        {"type": "A", "name": name, "content": content}, context.zone.id
    )


@given("I have a records file with:")
def step_impl(context):
    """Write the table rows to a YAML records file."""
    records = []
    for row in context.table:
        record = {key: row[key] for key in row.headings if row[key]}
        records.append(record)

    context.records_file = context.test_data_dir / "records.yaml"
    with open(context.records_file, "w") as f:
        yaml.safe_dump(records, f)


@when('I migrate "{domain}"')
def step_impl(context, domain):
    context.result = context.dns_manager.migrate_with_detection(domain, "full")


@when("I validate the zone")
def step_impl(context):
    context.result = context.dns_manager.validate_zone_setup(context.zone.id)


@when("I import the records file into the zone")
def step_impl(context):
    records = load_records_file(str(context.records_file))
    context.result = context.dns_manager.import_records(records, context.zone.id)


@when("I export the zone file")
def step_impl(context):
    context.zone_file = context.dns_manager.export_zone_file(context.zone.id)


@when('I import the zone file into a new zone "{name}"')
def step_impl(context, name):
    zone = context.dns_manager.create_zone(name)
    context.result = context.dns_manager.import_zone_file(context.zone_file, zone.id)


@then('a zone named "{name}" is created')
def step_impl(context, name):
    assert context.result.zone.name == name, f"Unexpected zone: {context.result.zone}"
    assert context.result.zone.id in context.provider.zones


@then("the migration reports a placeholder zone")
def step_impl(context):
    assert context.result.zone == Zone.placeholder(), f"Unexpected zone: {context.result.zone}"


@then("{count:d} records are detected")
def step_impl(context, count):
    assert len(context.result.detected) == count, context.result.detected


@then("{count:d} records are replicated into the zone")
def step_impl(context, count):
    assert len(context.result.replicated) == count, context.result.errors
    stored = context.provider.list_records(context.result.zone.id)
    assert len(stored) == count, stored


@then("{count:d} records are imported")
def step_impl(context, count):
    assert len(context.result.imported) == count, context.result.errors


@then("the migration reports {count:d} next steps")
def step_impl(context, count):
    assert len(context.result.next_steps) == count, context.result.next_steps


@then("the first next step lists the zone nameservers")
def step_impl(context):
    first = context.result.next_steps[0]
    for name_server in context.result.zone.name_servers:
        assert name_server in first, first


@then("the migration reports {count:d} error")
@then("the migration reports {count:d} errors")
def step_impl(context, count):
    assert len(context.result.errors) == count, context.result.errors


@then("the import reports {count:d} error")
@then("the import reports {count:d} errors")
def step_impl(context, count):
    assert len(context.result.errors) == count, context.result.errors


@then("the zone is valid")
def step_impl(context):
    assert context.result.valid, context.result.issues


@then("the zone is not valid")
def step_impl(context):
    assert not context.result.valid


@then("the validation reports {count:d} issues")
def step_impl(context, count):
    assert len(context.result.issues) == count, context.result.issues


@then('the zone file has an "{record_type}" line for "{name}" with content "{content}"')
def step_impl(context, record_type, name, content):
    for line in context.zone_file.splitlines():
        fields = line.split("\t")
        if len(fields) == 5 and fields[0] == name and fields[3] == record_type:
            assert fields[4] == content, line
            return
    raise AssertionError(f"No {record_type} line for {name} in:\n{context.zone_file}")


@then('propagation to "{nameservers}" is complete')
def step_impl(context, nameservers):
    expected = [ns.strip() for ns in nameservers.split(",")]
    assert context.dns_manager.check_propagation(context.test_domain, expected)


@then('propagation to "{nameservers}" is not complete')
def step_impl(context, nameservers):
    expected = [ns.strip() for ns in nameservers.split(",")]
    assert not context.dns_manager.check_propagation(context.test_domain, expected)
