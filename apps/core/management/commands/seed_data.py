from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from candidates.models import Application, Candidate
from jobs.models import Job
from messaging.models import Chat, Message
from notifications.models import Announcement
from support.models import SupportRequest, TicketPriority
from users.models import Employer

User = get_user_model()

EMPLOYERS = [
    # username, company, verification status, suspended
    ('acme', 'Acme Corp', Employer.VerificationStatus.APPROVED, False),
    ('globex', 'Globex Industries', Employer.VerificationStatus.PENDING, False),
    ('initech', 'Initech', Employer.VerificationStatus.REJECTED, False),
    ('umbrella', 'Umbrella Labs', Employer.VerificationStatus.APPROVED, True),
]

JOBS = [
    ('acme', 'Senior Python Developer', Job.Status.APPROVED),
    ('acme', 'Data Engineer', Job.Status.PENDING),
    ('acme', 'Office Manager', Job.Status.REJECTED),
    ('umbrella', 'Lab Technician', Job.Status.SUSPENDED),
]


class Command(BaseCommand):
    help = 'Seeds database with an admin, employers in every moderation state, jobs and a candidate'

    @transaction.atomic
    def handle(self, *args, **kwargs):
        self.stdout.write('Seeding data...')

        # Create Admin
        if not User.objects.filter(username='admin').exists():
            User.objects.create_superuser('admin', 'admin@example.com', 'admin')
            self.stdout.write(self.style.SUCCESS('Created superuser: admin'))
        admin = User.objects.get(username='admin')

        # Create Employers
        for username, company, status, suspended in EMPLOYERS:
            if User.objects.filter(username=username).exists():
                continue
            user = User.objects.create_user(username, f'{username}@example.com', 'password')
            user.role = User.Role.EMPLOYER
            user.status = User.Status.SUSPENDED if suspended else {
                Employer.VerificationStatus.APPROVED: User.Status.ACTIVE,
                Employer.VerificationStatus.REJECTED: User.Status.INACTIVE,
            }.get(status, User.Status.PENDING)
            user.save()
            Employer.objects.create(
                user=user,
                company_name=company,
                industry='Technology',
                city='Austin',
                country='USA',
                verification_status=status,
                verified_at=timezone.now() if status != Employer.VerificationStatus.PENDING else None,
                verified_by=admin if status != Employer.VerificationStatus.PENDING else None,
                is_suspended=suspended,
                suspension_reason='Seeded suspension' if suspended else None,
                suspended_at=timezone.now() if suspended else None,
                suspended_by=admin if suspended else None,
            )
            self.stdout.write(self.style.SUCCESS(f'Created employer: {company} ({status})'))

        # Create Jobs
        for username, title, status in JOBS:
            employer = Employer.objects.get(user__username=username)
            if Job.objects.filter(employer=employer, title=title).exists():
                continue
            Job.objects.create(
                employer=employer,
                title=title,
                description=f'{employer.company_name} is hiring a {title}.',
                requirements='- 3+ years of relevant experience',
                location='Remote',
                salary_range='$90k - $140k',
                category='Engineering',
                status=status,
                moderated_at=timezone.now() if status != Job.Status.PENDING else None,
                moderated_by=admin if status != Job.Status.PENDING else None,
            )
            self.stdout.write(self.style.SUCCESS(f'Created job: {title} ({status})'))

        # Candidate with an open support request
        if not User.objects.filter(username='candidate').exists():
            candidate = User.objects.create_user('candidate', 'candidate@example.com', 'password')
            SupportRequest.objects.create(
                user=candidate,
                subject='Cannot upload my CV',
                message='The upload button does nothing.',
                priority=TicketPriority.HIGH,
                category=SupportRequest.Category.TECHNICAL,
            )
            self.stdout.write(self.style.SUCCESS('Created candidate with a support request'))

        # Candidate profile, an application to the live job and its chat
        candidate = User.objects.get(username='candidate')
        profile, created = Candidate.objects.get_or_create(user=candidate, defaults={
            'bio': 'Backend developer who enjoys data pipelines.',
            'skills': ['Python', 'Django', 'SQL'],
            'location': 'Remote',
            'is_profile_complete': True,
        })
        if created:
            job = Job.objects.get(employer__user__username='acme', title='Senior Python Developer')
            application = Application.objects.create(
                job=job, candidate=profile, cover_letter=f'I would love to join {job.employer.company_name}.',
            )
            chat = Chat.objects.create(application=application, last_message_at=timezone.now())
            chat.participants.add(candidate, job.employer.user)
            Message.objects.create(chat=chat, sender=job.employer.user, content='Thanks for applying!')
            Message.objects.create(chat=chat, sender=candidate, content='Happy to chat any time.')
            self.stdout.write(self.style.SUCCESS('Created candidate profile, application and chat'))

        if not Announcement.objects.exists():
            Announcement.objects.create(
                title='Welcome to the admin panel',
                content='Draft announcement; publish it to broadcast to every user.',
                created_by=admin,
            )
            self.stdout.write(self.style.SUCCESS('Created draft announcement'))

        self.stdout.write(self.style.SUCCESS('Data seeding complete!'))
