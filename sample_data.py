#!/usr/bin/env python3
"""
Sample data generator for the Academic Records Portal
Creates faculty, students, TYL assignments and two semesters of TYL marks
"""

from app import create_app
from models.user import User
from services.admin_service import AdminService
from services.marks_service import MarksService

FACULTY = [
    {'email': 'ravi.kumar@college.edu', 'name': 'Ravi Kumar'},
    {'email': 'sunita.rao@college.edu', 'name': 'Sunita Rao'},
]

STUDENTS = [
    {'admission_id': '1CS22001', 'name': 'Asha Shetty', 'department': 'Computer Science', 'section': 'A'},
    {'admission_id': '1CS22002', 'name': 'Bharath Gowda', 'department': 'Computer Science', 'section': 'A'},
    {'admission_id': '1CS22003', 'name': 'Chaitra Nayak', 'department': 'Computer Science', 'section': 'B'},
    {'admission_id': '1EC22001', 'name': 'Deepak Hegde', 'department': 'Electronics', 'section': 'A'},
]

# (faculty index, subject code, subject name, semester)
TYL_SUBJECTS = [
    (0, 'a1', 'Aptitude Level 1', 1),
    (0, 'l1', 'Language Level 1', 1),
    (1, 's1', 'Soft Skills Level 1', 1),
    (1, 'c2-odd', 'Core Level 2 (Odd)', 1),
    (0, 'a2', 'Aptitude Level 2', 2),
    (1, 'p1-c', 'Programming Level 1 (C)', 2),
]

# admission id -> {subject code: (IA1, IA2)}
SCORES = {
    '1CS22001': {'a1': (30, 28), 'l1': (34, 33), 's1': (26, 25), 'c2-odd': (8, 6), 'a2': (27, 25), 'p1-c': (30, 31)},
    '1CS22002': {'a1': (22, 20), 'l1': (30, 29), 's1': (28, 30), 'c2-odd': (4, 3), 'a2': (31, 30), 'p1-c': (18, None)},
    '1CS22003': {'a1': (35, 30), 'l1': (36, 35), 's1': (20, 22), 'a2': (26, 24)},
    '1EC22001': {'a1': (25, 25), 'l1': (32, 34), 's1': (30, 30), 'p1-c': (28, 27)},
}

def create_sample_data():
    """Create sample data for the portal"""
    app = create_app()

    with app.app_context():
        print("Creating sample data...")

        for faculty in FACULTY:
            success, message = AdminService.create_user(dict(faculty, password='password123', role=User.ROLE_FACULTY))
            print(f"{'✓' if success else '✗'} {message}")

        for student in STUDENTS:
            success, message = AdminService.create_user(dict(
                student,
                email=f"{student['admission_id'].lower()}@student.college.edu",
                password='password123',
                role=User.ROLE_STUDENT,
                current_semester=1
            ))
            print(f"{'✓' if success else '✗'} {message}")

        faculty_ids = [User.query.filter_by(email=f['email']).first().id for f in FACULTY]
        students = [User.query.filter_by(email=f"{s['admission_id'].lower()}@student.college.edu").first() for s in STUDENTS]
        sections = sorted({s['section'] for s in STUDENTS})

        for semester in (1, 2):
            if semester == 2:
                AdminService.promote_students()
                print("✓ Promoted students to semester 2")

            for faculty_index, code, name, subject_semester in TYL_SUBJECTS:
                if subject_semester != semester:
                    continue
                for section in sections:
                    AdminService.assign_subject_to_faculty({
                        'faculty_id': faculty_ids[faculty_index],
                        'subject_code': code,
                        'subject_name': name,
                        'semester': semester,
                        'section': section,
                    })

                entries = []
                for user in students:
                    scores = SCORES[user.profile.admission_id].get(code)
                    if scores is None:
                        continue
                    entries.append({
                        'student_id': user.id,
                        'usn': user.profile.admission_id,
                        'student_name': user.profile.full_name,
                        'subject_code': code,
                        'subject_name': name,
                        'semester': semester,
                        'ia1_50': scores[0],
                        'ia2_50': scores[1],
                    })
                success, message, _ = MarksService.save_multiple_student_marks(entries, faculty_ids[faculty_index])
                print(f"{'✓' if success else '✗'} {code.upper()} semester {semester}: {message}")

        print("\nSample data creation completed!")
        print("\nLogin credentials:")
        print("Admin: admin@example.com / admin123")
        print("Faculty and students: [email] / password123")
        for faculty in FACULTY:
            print(f"  - {faculty['email']}")

if __name__ == '__main__':
    create_sample_data()
