from datetime import date

from django.urls import reverse
from django.contrib.auth import get_user_model
from rest_framework.test import APITestCase
from rest_framework import status

from movies.models import Movie
from .models import Discussion, DiscussionComment

User = get_user_model()


class DiscussionAPITests(APITestCase):
    def setUp(self):
        self.author = User.objects.create_user(username="author", password="testpass123")
        self.other = User.objects.create_user(username="other", password="testpass123")
        self.admin = User.objects.create_user(username="mod", password="testpass123")
        self.admin.profile.role = "admin"
        self.admin.profile.save()

        self.movie = Movie.objects.create(
            title="Heat",
            synopsis="Cops and robbers.",
            release_date=date(1995, 12, 15),
            runtime=170,
        )
        self.list_url = reverse("discussion-list")

    def make_discussion(self, **kwargs):
        kwargs.setdefault("title", "That shootout")
        kwargs.setdefault("content", "Best street scene ever?")
        kwargs.setdefault("category", "movie")
        kwargs.setdefault("related_movie", self.movie)
        return Discussion.objects.create(author=self.author, **kwargs)

    def test_create_discussion(self):
        self.client.force_authenticate(user=self.author)
        response = self.client.post(
            self.list_url,
            {
                "title": "Ending explained",
                "content": "What happened at the airport?",
                "category": "movie",
                "related_movie": str(self.movie.id),
                "tags": ["Ending", " spoilers "],
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        discussion = Discussion.objects.get()
        self.assertEqual(discussion.author, self.author)
        self.assertEqual(discussion.tags, ["ending", "spoilers"])

    def test_movie_discussion_needs_related_movie(self):
        self.client.force_authenticate(user=self.author)
        response = self.client.post(
            self.list_url,
            {"title": "Hmm", "content": "x", "category": "movie"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("related_movie", response.data)

    def test_filters_by_movie_and_category(self):
        self.make_discussion()
        self.make_discussion(title="Off topic", category="general", related_movie=None)

        by_movie = self.client.get(self.list_url, {"movie": str(self.movie.id)})
        by_category = self.client.get(self.list_url, {"category": "general"})

        self.assertEqual([d["title"] for d in by_movie.data["results"]], ["That shootout"])
        self.assertEqual([d["title"] for d in by_category.data["results"]], ["Off topic"])

    def test_malformed_id_filters_are_400(self):
        bad_person = self.client.get(self.list_url, {"person": "abc"})
        bad_movie = self.client.get(self.list_url, {"movie": "abc"})

        self.assertEqual(bad_person.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("person", bad_person.data)
        self.assertEqual(bad_movie.status_code, status.HTTP_400_BAD_REQUEST)

    def test_retrieve_counts_views(self):
        discussion = self.make_discussion()
        url = reverse("discussion-detail", args=[discussion.id])

        self.client.get(url)
        response = self.client.get(url)

        self.assertEqual(response.data["views"], 2)

    def test_only_author_or_admin_can_edit(self):
        discussion = self.make_discussion()
        url = reverse("discussion-detail", args=[discussion.id])

        self.client.force_authenticate(user=self.other)
        response = self.client.patch(url, {"title": "Hijacked"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(url, {"title": "Moderated"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        discussion.refresh_from_db()
        self.assertEqual(discussion.title, "Moderated")

    def test_comment_lifecycle(self):
        discussion = self.make_discussion()
        self.client.force_authenticate(user=self.other)

        created = self.client.post(
            reverse("discussion-comments", args=[discussion.id]),
            {"content": "The bank scene!"},
            format="json",
        )
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        comment_url = reverse(
            "discussion-comment-detail", args=[discussion.id, created.data["id"]]
        )

        # the thread author does not own the comment
        self.client.force_authenticate(user=self.author)
        self.assertEqual(
            self.client.patch(comment_url, {"content": "edited"}, format="json").status_code,
            status.HTTP_403_FORBIDDEN,
        )

        self.client.force_authenticate(user=self.other)
        edited = self.client.patch(comment_url, {"content": "The diner scene!"}, format="json")
        self.assertEqual(edited.status_code, status.HTTP_200_OK)
        self.assertEqual(DiscussionComment.objects.get().content, "The diner scene!")

        deleted = self.client.delete(comment_url)
        self.assertEqual(deleted.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(DiscussionComment.objects.count(), 0)

    def test_locked_discussion_rejects_comments(self):
        discussion = self.make_discussion()
        lock_url = reverse("discussion-lock", args=[discussion.id])

        self.client.force_authenticate(user=self.author)
        self.assertEqual(self.client.post(lock_url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.admin)
        response = self.client.post(lock_url)
        self.assertTrue(response.data["is_locked"])

        self.client.force_authenticate(user=self.other)
        response = self.client.post(
            reverse("discussion-comments", args=[discussion.id]),
            {"content": "Too late"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(DiscussionComment.objects.count(), 0)

    def test_locked_discussion_freezes_thread_edits(self):
        discussion = self.make_discussion(is_locked=True)
        url = reverse("discussion-detail", args=[discussion.id])

        self.client.force_authenticate(user=self.author)
        response = self.client.patch(url, {"title": "Rewritten"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        discussion.refresh_from_db()
        self.assertEqual(discussion.title, "That shootout")

        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(url, {"title": "Closed: that shootout"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        discussion.refresh_from_db()
        self.assertEqual(discussion.title, "Closed: that shootout")
