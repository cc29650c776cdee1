import requests
import openpyxl
from io import BytesIO

BASE_URL = "http://localhost:8000"


def create_schedule_workbook():
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["Time Period: 08/03/2025 - 08/09/2025"])
    ws.append(["Printed by manager"])
    ws.append(["Employee", "Position", "Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"])
    ws.append(["", "", "08/03/2025", "08/04/2025", "08/05/2025", "08/06/2025", "08/07/2025", "08/08/2025", "08/09/2025"])
    ws.append(["Smith, Alice", "Cashier", "9:00 AM - 5:00 PM", "", "9:00 AM - 5:00 PM", "", "", "", ""])
    ws.append(["Jones, Bob", "Stocker", "9:00 AM - 5:00 PM", "13:00-21:00", "", "", "", "", "7AM"])

    out = BytesIO()
    wb.save(out)
    out.seek(0)
    return out


def verify():
    print("\n--- Verifying Schedule Import ---")
    files = {'file': ('schedule.xlsx', create_schedule_workbook(), 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet')}

    resp = requests.post(f"{BASE_URL}/import/schedule/", files=files)
    print(f"Status: {resp.status_code}")
    if resp.status_code != 200:
        print(f"FAILED: {resp.text}")
        return

    data = resp.json()
    print(f"Header row: {data['header_row']} (split: {data['split_header']})")
    print(f"Employees: {data['employee_names']}")
    for s in data['shifts']:
        print(f"  {s['employeeName']}: {s['date']} {s['startTime']} - {s['endTime']} coworkers={s['coworkers'] or '-'}")

    if data['count'] == 5:
        print("SUCCESS: Parsed 5 shifts.")
    else:
        print(f"FAILURE: Expected 5 shifts, got {data['count']}")

    print("\n--- Verifying Name Filter ---")
    files = {'file': ('schedule.xlsx', create_schedule_workbook(), 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet')}
    resp = requests.post(f"{BASE_URL}/import/schedule/", files=files, params={"employee_name": "Alice Smith"})
    data = resp.json()
    if resp.status_code == 200 and all(s['employeeName'] == "Alice Smith" for s in data['shifts']):
        print(f"SUCCESS: {data['count']} shifts for Alice Smith.")
    else:
        print(f"FAILURE: {resp.status_code} {data}")


if __name__ == "__main__":
    verify()
