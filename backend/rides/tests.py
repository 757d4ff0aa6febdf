from unittest.mock import patch

from django.test import TestCase
from rest_framework.test import APIRequestFactory, force_authenticate

from accounts.models import User
from drivers.models import DriverProfile
from services.ride_management import ride_lifecycle, RideStoreUnavailableError
from .models import Ride
from .views import accept_ride, reject_ride, ride_detail, update_ride_status


class RideActionViewTests(TestCase):
	def setUp(self):
		self.factory = APIRequestFactory()
		self.student = User.objects.create_user(
			username='student@example.com',
			email='student@example.com',
			password='pass1234',
			name='Ada Student',
			role=User.STUDENT,
			phone_number='+2348010000000'
		)
		self.driver_one = User.objects.create_user(
			username='driver_one@example.com',
			email='driver_one@example.com',
			password='driver1234',
			name='Driver One',
			role=User.DRIVER,
			phone_number='+2348020000001'
		)
		self.driver_two = User.objects.create_user(
			username='driver_two@example.com',
			email='driver_two@example.com',
			password='driver1234',
			name='Driver Two',
			role=User.DRIVER,
			phone_number='+2348020000002'
		)
		self.admin = User.objects.create_user(
			username='admin@example.com',
			email='admin@example.com',
			password='admin1234',
			name='Admin',
			role=User.ADMIN
		)

		DriverProfile.objects.create(user=self.driver_one, plate_number='ABC-123DE')
		DriverProfile.objects.create(user=self.driver_two, plate_number='XYZ-987AB')

		self.ride = Ride.objects.create(
			student=self.student,
			pickup='Moremi Hall',
			destination='Faculty of Engineering',
			distance_km=3.4,
			duration_mins=9,
			price_naira='700.00',
			status=Ride.PENDING
		)

	def post(self, view, user, ride_id):
		request = self.factory.post('/api/rides/handle/%d/' % ride_id)
		force_authenticate(request, user=user)
		return view(request, ride_id=ride_id)

	def put_status(self, user, ride_id, data):
		request = self.factory.put('/api/rides/%d/status/' % ride_id, data, format='json')
		force_authenticate(request, user=user)
		return update_ride_status(request, ride_id=ride_id)

	def test_accept_ride_assigns_driver(self):
		response = self.post(accept_ride, self.driver_one, self.ride.id)

		self.assertEqual(response.status_code, 200)
		self.assertTrue(response.data['success'])
		self.assertEqual(response.data['ride']['status'], Ride.ACCEPTED)
		self.assertEqual(response.data['ride']['driver']['plate_number'], 'ABC-123DE')

		self.ride.refresh_from_db()
		self.assertEqual(self.ride.status, Ride.ACCEPTED)
		self.assertEqual(self.ride.driver, self.driver_one)

	def test_second_accept_returns_conflict(self):
		self.post(accept_ride, self.driver_one, self.ride.id)
		response = self.post(accept_ride, self.driver_two, self.ride.id)

		self.assertEqual(response.status_code, 409)
		self.assertEqual(response.data['error'], 'conflict')
		self.assertTrue(response.data['retryable'])

		self.ride.refresh_from_db()
		self.assertEqual(self.ride.driver, self.driver_one)

	def test_student_cannot_accept(self):
		response = self.post(accept_ride, self.student, self.ride.id)
		self.assertEqual(response.status_code, 403)

	def test_accept_unknown_ride(self):
		response = self.post(accept_ride, self.driver_one, 4242)
		self.assertEqual(response.status_code, 404)
		self.assertEqual(response.data['error'], 'not_found')

	def test_reject_keeps_ride_in_pool(self):
		response = self.post(reject_ride, self.driver_one, self.ride.id)

		self.assertEqual(response.status_code, 200)
		self.ride.refresh_from_db()
		self.assertEqual(self.ride.status, Ride.PENDING)
		self.assertIsNone(self.ride.driver)

	def test_status_update_by_assigned_driver(self):
		self.post(accept_ride, self.driver_one, self.ride.id)

		response = self.put_status(self.driver_one, self.ride.id, {'status': Ride.IN_PROGRESS})
		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data['ride']['status'], Ride.IN_PROGRESS)

	def test_status_update_by_other_driver_is_forbidden(self):
		self.post(accept_ride, self.driver_one, self.ride.id)

		response = self.put_status(self.driver_two, self.ride.id, {'status': Ride.COMPLETED})
		self.assertEqual(response.status_code, 403)
		self.assertEqual(response.data['error'], 'forbidden')

	def test_status_update_by_admin(self):
		response = self.put_status(self.admin, self.ride.id, {'status': Ride.CANCELLED})
		self.assertEqual(response.status_code, 200)

		response = self.put_status(self.admin, self.ride.id, {'status': Ride.COMPLETED})
		self.assertEqual(response.status_code, 409)
		self.assertEqual(response.data['error'], 'already_terminal')

	def test_status_update_rejects_unknown_status(self):
		response = self.put_status(self.admin, self.ride.id, {'status': 'ACCEPTED'})
		self.assertEqual(response.status_code, 400)
		self.assertEqual(response.data['error'], 'invalid_input')
		self.assertIn('IN_PROGRESS, COMPLETED, CANCELLED', response.data['message'])

		response = self.put_status(self.admin, self.ride.id, {})
		self.assertEqual(response.status_code, 400)

	def test_ride_detail(self):
		request = self.factory.get('/api/rides/%d/' % self.ride.id)
		force_authenticate(request, user=self.driver_two)
		response = ride_detail(request, ride_id=self.ride.id)

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data['pickup'], 'Moremi Hall')
		self.assertEqual(response.data['student']['name'], 'Ada Student')
		self.assertIsNone(response.data['driver'])

	@patch.object(ride_lifecycle.ride_store, 'get_by_id', side_effect=RideStoreUnavailableError())
	def test_store_outage_returns_503(self, mock_get):
		response = self.post(accept_ride, self.driver_one, self.ride.id)

		self.assertEqual(response.status_code, 503)
		self.assertEqual(response.data['error'], 'unavailable')
		self.assertNotIn('Traceback', str(response.data))
		mock_get.assert_called_once()
