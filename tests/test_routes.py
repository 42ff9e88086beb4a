"""
Integration tests for routes and workflows
"""

import unittest
from app import create_app
from config import TestingConfig
from database import db
from models.user import User
from models.student import StudentProfile
from models.marks import SubjectMark
from models.assignments import FacultySubjectAssignment

class TestRoutes(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures"""
        self.app = create_app(TestingConfig)
        self.app_context = self.app.app_context()
        self.app_context.push()
        db.create_all()

        faculty = User(email='faculty@example.com', name='Ravi Kumar', role=User.ROLE_FACULTY, status=User.STATUS_ACTIVE)
        faculty.set_password('password123')

        student = User(email='student@example.com', name='Asha Rao', role=User.ROLE_STUDENT, status=User.STATUS_ACTIVE)
        student.set_password('password123')
        student.profile = StudentProfile(
            admission_id='1CS21001',
            full_name='Asha Rao',
            department='Computer Science',
            current_semester=1,
            year=1,
            section='A'
        )
        db.session.add_all([faculty, student])
        db.session.commit()

        db.session.add(FacultySubjectAssignment(
            faculty_id=faculty.id, subject_code='a1', subject_name='Aptitude 1', semester=1, section='A'
        ))
        db.session.add(SubjectMark(
            student_id=student.id, usn='1CS21001', student_name='Asha Rao',
            subject_code='l1', subject_name='Language 1', semester=1, ia1_50=35, ia2_50=35
        ))
        db.session.commit()

        self.faculty_id = faculty.id
        self.student_id = student.id
        self.client = self.app.test_client()

    def tearDown(self):
        """Clean up after tests"""
        db.session.remove()
        db.drop_all()
        self.app_context.pop()

    def login(self, email, password='password123', follow_redirects=False):
        return self.client.post('/login', data={
            'email': email,
            'password': password
        }, follow_redirects=follow_redirects)

    def test_landing_page(self):
        """Test landing page loads correctly"""
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertIn(b'Academic Records Portal', response.data)

    def test_login_redirects_by_role(self):
        """Each role lands on its own dashboard"""
        response = self.login('admin@example.com', 'admin123')
        self.assertEqual(response.status_code, 302)
        self.assertIn('/admin/dashboard', response.headers['Location'])

        self.client.post('/logout')
        response = self.login('faculty@example.com', follow_redirects=True)
        self.assertEqual(response.status_code, 200)
        self.assertIn(b'Faculty Dashboard', response.data)

        self.client.post('/logout')
        response = self.login('student@example.com', follow_redirects=True)
        self.assertEqual(response.status_code, 200)
        self.assertIn(b'My TYL Progress', response.data)

    def test_login_failure(self):
        """Test failed login"""
        response = self.login('faculty@example.com', 'wrongpassword', follow_redirects=True)
        self.assertEqual(response.status_code, 200)
        self.assertIn(b'Invalid email or password', response.data)

    def test_logout(self):
        """Test logout functionality"""
        self.login('faculty@example.com')
        response = self.client.post('/logout', follow_redirects=True)
        self.assertEqual(response.status_code, 200)
        self.assertIn(b'logged out successfully', response.data)

    def test_protected_routes_require_login(self):
        """Test that protected routes redirect to login"""
        for url in ('/admin/dashboard', '/faculty/dashboard', '/student/dashboard', '/faculty/tyl-analysis'):
            response = self.client.get(url)
            self.assertEqual(response.status_code, 302, url)

    def test_role_access_control(self):
        """Students cannot reach faculty views"""
        self.login('student@example.com')
        response = self.client.get('/faculty/tyl-analysis')
        self.assertEqual(response.status_code, 302)

    def test_admin_dashboard(self):
        """Admin dashboard shows overview counts"""
        self.login('admin@example.com', 'admin123')
        response = self.client.get('/admin/dashboard')
        self.assertEqual(response.status_code, 200)
        self.assertIn(b'Students: 1', response.data)

    def test_admin_promote_students(self):
        """Promotion from the admin dashboard moves students on"""
        self.login('admin@example.com', 'admin123')
        response = self.client.post('/admin/promote-students', data={'department': 'Computer Science'}, follow_redirects=True)
        self.assertEqual(response.status_code, 200)
        self.assertIn(b'Promoted 1 students', response.data)
        self.assertEqual(StudentProfile.query.first().current_semester, 2)

    def test_tyl_analysis_json(self):
        """Department analysis returns one row per department"""
        self.login('faculty@example.com')
        response = self.client.get('/faculty/tyl-analysis?type=department')
        self.assertEqual(response.status_code, 200)

        payload = response.get_json()
        self.assertTrue(payload['success'])
        self.assertEqual(len(payload['rows']), len(self.app.config['DEPARTMENTS']))
        self.assertEqual(payload['rows'][0]['passed_counts']['l1'], 1)
        self.assertEqual(payload['rows'][0]['levels_reached']['lx'], 1)

        response = self.client.get('/faculty/tyl-analysis?type=semester')
        self.assertEqual(response.status_code, 400)

    def test_tyl_analysis_exports(self):
        """Analysis downloads as Excel and PDF"""
        self.login('faculty@example.com')
        response = self.client.get('/faculty/tyl-analysis/export/excel?type=section&department=Computer+Science')
        self.assertEqual(response.status_code, 200)
        self.assertIn('attachment', response.headers['Content-Disposition'])
        self.assertTrue(response.data.startswith(b'PK'))

        response = self.client.get('/faculty/tyl-analysis/export/pdf?type=batch&department=Computer+Science')
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data.startswith(b'%PDF'))

        response = self.client.get('/faculty/tyl-analysis/export/csv')
        self.assertEqual(response.status_code, 400)

    def test_raw_tyl_marks(self):
        """Raw marks need a subject code"""
        self.login('faculty@example.com')
        response = self.client.get('/faculty/tyl-analysis/raw')
        self.assertEqual(response.status_code, 400)

        response = self.client.get('/faculty/tyl-analysis/raw?subject_code=L1')
        rows = response.get_json()['rows']
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]['total'], 70)
        self.assertTrue(rows[0]['passed'])

    def test_tyl_marks_entry_workflow(self):
        """Faculty lists assigned subjects and students, then saves marks"""
        self.login('faculty@example.com')

        response = self.client.get('/faculty/tyl-marks-entry/subjects?semester=1&section=A')
        self.assertEqual(response.get_json()['subjects'], [{'code': 'a1', 'name': 'Aptitude 1'}])

        response = self.client.get('/faculty/tyl-marks-entry/students?semester=1&section=A&subject_code=a1')
        students = response.get_json()['students']
        self.assertEqual(len(students), 1)
        self.assertIsNone(students[0]['marks'])

        response = self.client.post('/faculty/tyl-marks-entry', json={
            'semester': 1,
            'section': 'A',
            'subject_code': 'a1',
            'entries': [{
                'student_id': self.student_id,
                'usn': '1CS21001',
                'student_name': 'Asha Rao',
                'subject_name': 'Aptitude 1',
                'ia1_50': 30,
                'ia2_50': 25,
            }]
        })
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()['success'])
        self.assertEqual(SubjectMark.query.filter_by(subject_code='a1').first().ia2_50, 25)

        response = self.client.post('/faculty/tyl-marks-entry', json={
            'semester': 1, 'section': 'A', 'subject_code': 'l2', 'entries': []
        })
        self.assertEqual(response.status_code, 400)

    def test_student_report(self):
        """Faculty and students can view a TYL report"""
        self.login('faculty@example.com')
        response = self.client.get(f'/faculty/students/{self.student_id}/tyl-report')
        self.assertEqual(response.get_json()['report']['levels']['lx'], 1)

        response = self.client.get(f'/faculty/students/{self.student_id}/tyl-report?format=pdf')
        self.assertTrue(response.data.startswith(b'%PDF'))

        response = self.client.get('/faculty/students/9999/tyl-report')
        self.assertEqual(response.status_code, 404)

        self.client.post('/logout')
        self.login('student@example.com')
        response = self.client.get('/student/dashboard')
        self.assertEqual(response.status_code, 200)
        self.assertIn(b'L1', response.data)
        response = self.client.get('/student/tyl-report')
        self.assertEqual(response.get_json()['report']['profile']['admission_id'], '1CS21001')

    def test_unknown_code_in_strict_mode_is_a_bad_request(self):
        """Faculty and student report routes both answer 400 for an unknown code"""
        self.app.config['TYL_STRICT_SUBJECT_CODES'] = True
        db.session.add(SubjectMark(
            student_id=self.student_id, usn='1CS21001', student_name='Asha Rao',
            subject_code='c3', subject_name='Core 3', semester=1, ia1_50=20, ia2_50=20
        ))
        db.session.commit()

        self.login('faculty@example.com')
        response = self.client.get(f'/faculty/students/{self.student_id}/tyl-report')
        self.assertEqual(response.status_code, 400)

        self.client.post('/logout')
        self.login('student@example.com')
        response = self.client.get('/student/tyl-report')
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.get_json()['success'])

        response = self.client.get('/student/dashboard')
        self.assertEqual(response.status_code, 200)
        self.assertIn(b'Error loading TYL report', response.data)

if __name__ == '__main__':
    unittest.main()
