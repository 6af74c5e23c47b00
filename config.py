# -*- coding: utf-8 -*-
"""
Clinic configuration. Branches, labels and staffing targets live here.
"""

CONFIG = {
    # Ordered branch list; the first one is selected on startup.
    "branches": [
        "บึงทับช้าง", "บัวใหญ่", "โนนสูง", "ขามสะแกแสง", "หนองไข่น้ำ",
        "พนมวันท์", "วังน้ำเขียว", "เคหะ", "โนนไทย", "จักราช",
    ],

    # Suggested positions for the add-employee form (free text is allowed)
    "positions": ["แพทย์แผนไทย", "ผู้ช่วยแพทย์", "พนักงานนวด"],

    # Branch value recorded for part-time staff
    "pool_branch": "พาร์ทไทม์",

    "id_prefixes": {
        "full-time": "emp",
        "part-time": "pte",
    },

    # Keys follow domain.dates.WEEKDAYS (Sunday first) plus "none"
    "weekday_labels": {
        "sunday": "อาทิตย์",
        "monday": "จันทร์",
        "tuesday": "อังคาร",
        "wednesday": "พุธ",
        "thursday": "พฤหัสบดี",
        "friday": "ศุกร์",
        "saturday": "เสาร์",
        "none": "ไม่มี",
    },
    "clinic_day_off": "sunday",

    # Display labels per shift tag
    "shift_labels": {
        "morning": "เช้า",
        "afternoon": "บ่าย",
        "day-off": "หยุด",
        "leave": "ลา",
        "sick": "ป่วย",
        "clinic-closed": "ปิด",
        "": "-",
    },

    # Advisory staffing band per branch and day
    "staffing": {
        "min": 3,
        "max": 4,
    },

    "prompts": {
        "clinic_closed_title": "วันหยุดคลินิก",
        "clinic_closed_message": "คลินิกปิดทำการในวัน{weekday} ไม่สามารถจัดเวรได้",
        "part_time_title": "ข้อจำกัดพนักงานพาร์ทไทม์",
        "part_time_message": (
            'พนักงานพาร์ทไทม์คนนี้ถูกจัดเวรในสาขา "{other}" อยู่แล้วในวันนี้ '
            'ไม่สามารถจัดเวรในสาขา "{branch}" ได้'
        ),
        "missing_fields_title": "ข้อมูลไม่ครบถ้วน",
        "missing_fields_message": (
            "กรุณากรอกชื่อ, ตำแหน่ง และสาขา (สำหรับ Full-time) "
            "หรือประเภทพนักงาน (สำหรับ Part-time)"
        ),
        "delete_title": "ยืนยันการลบ",
        "delete_message": "คุณแน่ใจหรือไม่ที่ต้องการลบพนักงานคนนี้? ตารางเวรที่เกี่ยวข้องอาจหายไป",
    },
}
