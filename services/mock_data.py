"""Sample records for development and demos.

Loaded into :class:`services.record_store.InMemoryRecordStore` when
``USE_MOCK_DATA=true``. Records use the store's wire shape (camelCase).
"""

STUDENTS = [
    {
        "id": "1",
        "firstName": "Emma",
        "lastName": "Johnson",
        "email": "emma.johnson@school.edu",
        "parentContact": "(555) 123-4567",
        "notes": "Excellent in math, needs encouragement in writing",
        "photoUrl": "https://ui-avatars.com/api/?name=Emma+Johnson&background=2E7D32&color=fff",
    },
    {
        "id": "2",
        "firstName": "Liam",
        "lastName": "Chen",
        "email": "liam.chen@school.edu",
        "parentContact": "liam.parents@example.com",
        "notes": "",
        "photoUrl": "https://ui-avatars.com/api/?name=Liam+Chen&background=2E7D32&color=fff",
    },
    {
        "id": "3",
        "firstName": "Sofia",
        "lastName": "Martinez",
        "email": "sofia.martinez@school.edu",
        "parentContact": "(555) 987-6543",
        "notes": "Class representative",
        "photoUrl": "https://ui-avatars.com/api/?name=Sofia+Martinez&background=2E7D32&color=fff",
    },
    {
        "id": "4",
        "firstName": "Noah",
        "lastName": "Williams",
        "email": "noah.williams@school.edu",
        "photoUrl": "https://ui-avatars.com/api/?name=Noah+Williams&background=2E7D32&color=fff",
    },
]

CLASSES = [
    {
        "id": "1",
        "name": "Algebra I",
        "subject": "Mathematics",
        "period": "1st",
        "room": "101A",
        "schedule": {"time": "8:00 AM", "days": [1, 2, 3, 4, 5]},
        "studentIds": ["1", "2", "3"],
    },
    {
        "id": "2",
        "name": "Biology",
        "subject": "Science",
        "period": "3rd",
        "room": "Lab 2",
        "schedule": {"time": "10:30 AM", "days": [1, 3, 5]},
        "studentIds": ["2", "4"],
    },
]

ASSIGNMENTS = [
    {
        "id": "1",
        "classId": "1",
        "title": "Linear Equations Quiz",
        "category": "Quiz",
        "points": 50,
        "dueDate": "2024-03-15",
    },
    {
        "id": "2",
        "classId": "1",
        "title": "Chapter 3 Homework",
        "category": "Homework",
        "points": 20,
        "dueDate": "2024-03-18T23:59:00Z",
    },
    {
        "id": "3",
        "classId": "2",
        "title": "Cell Structure Lab Report",
        "category": "Lab",
        "points": 100,
        "dueDate": "2024-03-20",
    },
]

GRADES = [
    {"id": "1", "studentId": "1", "assignmentId": "1", "score": 48,
     "submittedDate": "2024-03-15T09:12:00Z", "feedback": "Great work"},
    {"id": "2", "studentId": "2", "assignmentId": "1", "score": 39,
     "submittedDate": "2024-03-15T09:40:00Z", "feedback": ""},
    {"id": "3", "studentId": "1", "assignmentId": "2", "score": 18,
     "submittedDate": "2024-03-18T20:05:00Z", "feedback": ""},
    {"id": "4", "studentId": "4", "assignmentId": "3", "score": 72,
     "submittedDate": "2024-03-20T14:30:00Z", "feedback": "Label the diagrams"},
]

ATTENDANCE = [
    {"id": "1", "studentId": "1", "date": "2024-03-15", "status": "present"},
    {"id": "2", "studentId": "2", "date": "2024-03-15", "status": "late"},
    {"id": "3", "studentId": "3", "date": "2024-03-15", "status": "absent"},
    {"id": "4", "studentId": "1", "date": "2024-03-18", "status": "present"},
    {"id": "5", "studentId": "4", "date": "2024-03-18", "status": "excused"},
]

LESSON_PLANS = [
    {
        "id": "1",
        "classId": "1",
        "date": "2024-03-15",
        "title": "Solving Two-Step Equations",
        "objectives": ["Isolate the variable", "Check solutions by substitution"],
        "activities": ["Warm-up review", "Guided practice", "Exit ticket"],
        "materials": ["Whiteboard", "Worksheet 3.2"],
        "homework": "Page 112, problems 1-15",
    },
    {
        "id": "2",
        "classId": "2",
        "date": "2024-03-20",
        "title": "Microscope Lab",
        "time": "10:30 AM",
        "objectives": ["Identify plant and animal cells"],
        "activities": ["Slide preparation", "Observation and sketching"],
        "materials": ["Microscopes", "Onion skin slides"],
    },
]

SEED = {
    "students": STUDENTS,
    "classes": CLASSES,
    "assignments": ASSIGNMENTS,
    "grades": GRADES,
    "attendance": ATTENDANCE,
    "lesson-plans": LESSON_PLANS,
}
