"""Tests for appliance aggregate assembly."""

import json
from datetime import datetime, timedelta, timezone

from modules.appliances.assembler import (
    assemble_appliance,
    map_linked_document,
    map_maintenance_task,
    map_support_contact,
)
from modules.appliances.models import (
    MaintenanceFrequency,
    MaintenanceStatus,
    WarrantyStatus,
)

from .fakes import (
    FIXED_NOW,
    create_appliance_row,
    create_contact_row,
    create_document_row,
    create_task_row,
    months_ago,
)


class TestAssembleAppliance:
    def test_maps_appliance_fields(self):
        row = create_appliance_row(purchase_date=months_ago(6))

        appliance = assemble_appliance(row, FIXED_NOW)

        assert appliance.id == "appliance-123"
        assert appliance.owner_user_id == "user-123"
        assert appliance.name == "Dishwasher"
        assert appliance.brand == "Bosch"
        assert appliance.model == "SMS6ZCI49E"
        assert appliance.warranty_duration_months == 24
        assert appliance.serial_number == "SN-0001"
        assert appliance.purchase_location == "Hardware Store"
        assert appliance.notes is None
        assert appliance.warranty_status == WarrantyStatus.ACTIVE
        assert appliance.warranty_end_date == datetime(2027, 10, 15, 12, 0, tzinfo=timezone.utc)

    def test_missing_children_become_empty_lists(self):
        """Rows without embedded children should assemble with empty lists."""
        appliance = assemble_appliance(create_appliance_row(), FIXED_NOW)

        assert appliance.support_contacts == []
        assert appliance.maintenance_tasks == []
        assert appliance.linked_documents == []

    def test_null_children_become_empty_lists(self):
        row = create_appliance_row(
            support_contacts=None,
            maintenance_tasks=None,
            linked_documents=None,
        )

        appliance = assemble_appliance(row, FIXED_NOW)

        assert appliance.support_contacts == []
        assert appliance.maintenance_tasks == []
        assert appliance.linked_documents == []

    def test_stored_task_status_is_recomputed(self):
        """A stale stored status must be replaced by the derived one."""
        row = create_appliance_row(maintenance_tasks=[
            create_task_row(
                scheduled_date=FIXED_NOW - timedelta(days=10),
                status="Upcoming",
            ),
        ])

        appliance = assemble_appliance(row, FIXED_NOW)

        assert appliance.maintenance_tasks[0].status == MaintenanceStatus.OVERDUE

    def test_status_depends_on_evaluation_time(self):
        row = create_appliance_row(maintenance_tasks=[
            create_task_row(scheduled_date=FIXED_NOW + timedelta(days=1)),
        ])

        before = assemble_appliance(row, FIXED_NOW)
        after = assemble_appliance(row, FIXED_NOW + timedelta(days=2))

        assert before.maintenance_tasks[0].status == MaintenanceStatus.UPCOMING
        assert after.maintenance_tasks[0].status == MaintenanceStatus.OVERDUE

    def test_tasks_sorted_by_schedule(self):
        row = create_appliance_row(maintenance_tasks=[
            create_task_row(task_id="later", scheduled_date=FIXED_NOW + timedelta(days=30)),
            create_task_row(task_id="sooner", scheduled_date=FIXED_NOW + timedelta(days=3)),
        ])

        appliance = assemble_appliance(row, FIXED_NOW)

        assert [t.id for t in appliance.maintenance_tasks] == ["sooner", "later"]

    def test_sorts_mixed_naive_and_aware_schedules(self):
        """Offset-less timestamps are read as UTC when ordering tasks."""
        naive_now = FIXED_NOW.replace(tzinfo=None)
        row = create_appliance_row(maintenance_tasks=[
            create_task_row(task_id="aware-later", scheduled_date=FIXED_NOW + timedelta(days=5)),
            create_task_row(task_id="naive-sooner", scheduled_date=naive_now + timedelta(days=2)),
            create_task_row(task_id="aware-sooner", scheduled_date=FIXED_NOW + timedelta(days=1)),
        ])

        appliance = assemble_appliance(row, FIXED_NOW)

        assert [t.id for t in appliance.maintenance_tasks] == [
            "aware-sooner",
            "naive-sooner",
            "aware-later",
        ]

    def test_children_pass_through(self):
        row = create_appliance_row(
            support_contacts=[create_contact_row()],
            linked_documents=[create_document_row()],
        )

        appliance = assemble_appliance(row, FIXED_NOW)

        contact = appliance.support_contacts[0]
        assert contact.name == "Bosch Service"
        assert contact.company == "BSH"
        assert contact.website == "https://www.bosch-home.com"
        document = appliance.linked_documents[0]
        assert document.title == "User manual"
        assert document.url == "https://example.com/manual.pdf"

    def test_unowned_row(self):
        appliance = assemble_appliance(create_appliance_row(user_id=None), FIXED_NOW)
        assert appliance.owner_user_id is None

    def test_expiring_threshold_is_configurable(self):
        row = create_appliance_row(purchase_date=months_ago(22), warranty_duration_months=24)

        assert assemble_appliance(row, FIXED_NOW).warranty_status == WarrantyStatus.ACTIVE
        assert (
            assemble_appliance(row, FIXED_NOW, expiring_soon_days=90).warranty_status
            == WarrantyStatus.EXPIRING_SOON
        )

    def test_serializes_with_camel_case_keys(self):
        row = create_appliance_row(maintenance_tasks=[create_task_row()])

        data = assemble_appliance(row, FIXED_NOW).model_dump(mode="json", by_alias=True)

        assert "purchaseDate" in data
        assert "warrantyDurationMonths" in data
        assert "warrantyStatus" in data
        assert data["maintenanceTasks"][0]["taskName"] == "Clean filter"
        assert data["supportContacts"] == []

    def test_accepts_z_suffix_timestamps(self):
        row = create_appliance_row()
        row["purchase_date"] = "2025-10-15T12:00:00Z"

        appliance = assemble_appliance(row, FIXED_NOW)

        assert appliance.purchase_date == datetime(2025, 10, 15, 12, 0, tzinfo=timezone.utc)


class TestMapMaintenanceTask:
    def test_completed_task(self):
        task = map_maintenance_task(
            create_task_row(
                scheduled_date=FIXED_NOW - timedelta(days=3),
                completed_date=FIXED_NOW - timedelta(days=1),
                status="Overdue",
            ),
            FIXED_NOW,
        )

        assert task.status == MaintenanceStatus.COMPLETED
        assert task.completed_date == FIXED_NOW - timedelta(days=1)
        assert task.frequency == MaintenanceFrequency.MONTHLY

    def test_service_provider_object(self):
        task = map_maintenance_task(
            create_task_row(service_provider={"name": "FixIt", "phone": "555-0100"}),
            FIXED_NOW,
        )

        assert task.service_provider is not None
        assert task.service_provider.name == "FixIt"
        assert task.service_provider.phone == "555-0100"
        assert task.service_provider.email is None

    def test_service_provider_json_string(self):
        """Providers stored as JSON text should be decoded."""
        task = map_maintenance_task(
            create_task_row(service_provider=json.dumps({"name": "FixIt"})),
            FIXED_NOW,
        )

        assert task.service_provider.name == "FixIt"

    def test_no_service_provider(self):
        task = map_maintenance_task(create_task_row(), FIXED_NOW)
        assert task.service_provider is None

    def test_falls_back_to_parent_id(self):
        row = create_task_row()
        del row["appliance_id"]

        task = map_maintenance_task(row, FIXED_NOW, "appliance-999")

        assert task.appliance_id == "appliance-999"


class TestMapChildren:
    def test_map_support_contact(self):
        contact = map_support_contact(create_contact_row(contact_id="c-1"))
        assert contact.id == "c-1"
        assert contact.appliance_id == "appliance-123"
        assert contact.email is None

    def test_map_linked_document(self):
        document = map_linked_document(create_document_row(document_id="d-1"))
        assert document.id == "d-1"
        assert document.appliance_id == "appliance-123"
