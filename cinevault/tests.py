from datetime import date

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from movies.models import Movie
from reviews.models import Review
from .membership import add_member, remove_member, toggle_member
from .permissions import can_mutate, is_admin

User = get_user_model()


class CanMutateTests(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(username="owner", password="testpass123")
        self.other = User.objects.create_user(username="other", password="testpass123")
        self.movie = Movie.objects.create(
            title="Gate", synopsis="x", release_date=date(2001, 1, 1), runtime=90
        )
        self.review = Review.objects.create(
            user=self.owner, movie=self.movie, rating=4, comment="ok"
        )

    def test_owner_may_mutate(self):
        self.assertTrue(can_mutate(self.owner, self.review, "user"))

    def test_other_user_may_not(self):
        self.assertFalse(can_mutate(self.other, self.review, "user"))

    def test_anonymous_may_not(self):
        self.assertFalse(can_mutate(AnonymousUser(), self.review, "user"))
        self.assertFalse(can_mutate(None, self.review, "user"))

    def test_admin_role_and_superuser_may(self):
        self.other.profile.role = "admin"
        self.other.profile.save()
        root = User.objects.create_superuser(username="root", password="testpass123")

        self.assertTrue(is_admin(self.other))
        self.assertTrue(can_mutate(self.other, self.review, "user"))
        self.assertTrue(can_mutate(root, self.review, "user"))

    def test_embedded_items_use_added_by(self):
        item = {"id": "abc", "fact": "x", "added_by": self.owner.pk}

        self.assertTrue(can_mutate(self.owner, item, "added_by"))
        self.assertFalse(can_mutate(self.other, item, "added_by"))
        self.assertFalse(can_mutate(self.owner, {"id": "abc"}, "added_by"))


class MembershipTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="member", password="testpass123")
        self.movie = Movie.objects.create(
            title="Member", synopsis="x", release_date=date(2001, 1, 1), runtime=90
        )
        self.wishlist = self.user.profile.wishlist

    def test_add_twice_keeps_one_reference(self):
        self.assertTrue(add_member(self.wishlist, self.movie))
        self.assertFalse(add_member(self.wishlist, self.movie))
        self.assertEqual(self.wishlist.count(), 1)

    def test_remove_absent_is_a_no_op(self):
        self.assertFalse(remove_member(self.wishlist, self.movie))
        self.assertEqual(self.wishlist.count(), 0)

    def test_toggle_returns_resulting_state(self):
        self.assertTrue(toggle_member(self.wishlist, self.movie))
        self.assertFalse(toggle_member(self.wishlist, self.movie))
        self.assertEqual(self.wishlist.count(), 0)
