"""Factory Boy factories for prop lifecycle test data."""

import factory
from factory.django import DjangoModelFactory

from django.utils import timezone

from .statuses import PropStatus


class UserFactory(DjangoModelFactory):
    """Factory for CustomUser model."""

    class Meta:
        model = "accounts.CustomUser"
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    display_name = factory.Faker("name")
    is_active = True

    @factory.post_generation
    def password(self, create, extracted, **kwargs):
        pwd = extracted or "testpass123!"
        self.set_password(pwd)
        if create:
            self.save(update_fields=["password"])


class ShowFactory(DjangoModelFactory):
    class Meta:
        model = "props.Show"

    name = factory.Sequence(lambda n: f"Show {n}")
    description = factory.Faker("sentence")


class ShowMemberFactory(DjangoModelFactory):
    """Factory for ShowMember. Defaults to a plain props team member."""

    class Meta:
        model = "props.ShowMember"

    show = factory.SubFactory(ShowFactory)
    user = factory.SubFactory(UserFactory)
    role = "props_team"


class PropFactory(DjangoModelFactory):
    """Factory for Prop model.

    ``assigned_to`` accepts a list of users, e.g.
    ``PropFactory(assigned_to=[user])``.
    """

    class Meta:
        model = "props.Prop"
        skip_postgeneration_save = True

    show = factory.SubFactory(ShowFactory)
    name = factory.Sequence(lambda n: f"Prop {n}")
    category = "Hand Props"
    location = "Prop Store A"
    status = PropStatus.CONFIRMED
    last_status_update = factory.LazyFunction(timezone.now)

    @factory.post_generation
    def assigned_to(self, create, extracted, **kwargs):
        if create and extracted:
            self.assigned_to.set(extracted)


class TaskBoardFactory(DjangoModelFactory):
    class Meta:
        model = "props.TaskBoard"

    show = factory.SubFactory(ShowFactory)
    name = "Props To Do"


class TaskListFactory(DjangoModelFactory):
    class Meta:
        model = "props.TaskList"

    board = factory.SubFactory(TaskBoardFactory)
    name = factory.Sequence(lambda n: f"List {n}")
    order = factory.Sequence(lambda n: n)


class TaskCardFactory(DjangoModelFactory):
    class Meta:
        model = "props.TaskCard"

    task_list = factory.SubFactory(TaskListFactory)
    title = factory.Sequence(lambda n: f"Task {n}")
    priority = "medium"
    status = "not_started"
    completed = False


class PropStatusHistoryFactory(DjangoModelFactory):
    """Factory for PropStatusHistory.

    PropStatusHistory.save() blocks updates on existing rows, so this
    factory only creates new instances.
    """

    class Meta:
        model = "props.PropStatusHistory"

    prop = factory.SubFactory(PropFactory)
    previous_status = PropStatus.CONFIRMED
    new_status = PropStatus.AVAILABLE_IN_STORAGE
    updated_by = factory.SubFactory(UserFactory)


class NotificationFactory(DjangoModelFactory):
    class Meta:
        model = "props.Notification"

    user = factory.SubFactory(UserFactory)
    type = "prop_status_update"
    title = "Prop Status Updated"
    message = factory.Faker("sentence")
