"""
Shared fixtures: a small branch snapshot in document-store shape.
"""

import json

import pytest

SNAPSHOT_DOCUMENTS = {
    "schedules": [
        {"employeeId": "stylist-1", "dayOfWeek": "Monday", "startTime": "09:00", "endTime": "12:00",
         "branchId": "branch-a"},
        {"employeeId": "stylist-1", "dayOfWeek": "Wednesday", "startTime": "13:00", "endTime": "17:00",
         "branchId": "branch-a"},
        {"employeeId": "stylist-2", "dayOfWeek": "Monday", "startTime": "10:00", "endTime": "18:00",
         "branchId": "branch-a"},
    ],
    "leaveRequests": [
        {"id": "leave-1", "employeeId": "stylist-2", "startDate": "2024-11-25", "endDate": "2024-11-26",
         "leaveType": "vacation", "status": "approved", "approvedBy": "manager-1"},
        {"id": "leave-2", "employeeId": "stylist-1", "startDate": "2024-11-25", "endDate": "2024-11-25",
         "leaveType": "sick", "status": "pending"},
    ],
    "appointments": [
        {"id": "appt-1", "clientId": "client-1", "branchId": "branch-a", "appointmentDate": "2024-11-25",
         "appointmentTime": "10:00", "status": "confirmed",
         "staffAssignments": [{"staffId": "stylist-1", "serviceId": "cut", "duration": 60}]},
    ],
}


@pytest.fixture
def snapshot_documents():
    return json.loads(json.dumps(SNAPSHOT_DOCUMENTS))


@pytest.fixture
def snapshot_file(tmp_path, snapshot_documents):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_documents), encoding="utf-8")
    return path
