from datetime import timedelta

from django.urls import reverse
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APITestCase
from rest_framework import status

from .models import NewsArticle

User = get_user_model()


class NewsArticleAPITests(APITestCase):
    def setUp(self):
        self.author = User.objects.create_user(username="reporter", password="testpass123")
        self.other = User.objects.create_user(username="reader", password="testpass123")
        self.admin = User.objects.create_user(username="editor", password="testpass123")
        self.admin.profile.role = "admin"
        self.admin.profile.save()

        self.list_url = reverse("newsarticle-list")

    def make_article(self, days_ago=0, **kwargs):
        kwargs.setdefault("title", "Sequel confirmed")
        kwargs.setdefault("content", "The studio announced a second part.")
        kwargs.setdefault("category", "projects")
        kwargs.setdefault("source", "Variety")
        kwargs.setdefault("author", self.author)
        kwargs["publication_date"] = timezone.now() - timedelta(days=days_ago)
        return NewsArticle.objects.create(**kwargs)

    def test_anonymous_cannot_create_article(self):
        response = self.client.post(
            self.list_url,
            {"title": "Nope", "content": "x", "category": "movies", "source": "Blog"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(NewsArticle.objects.count(), 0)

    def test_create_article(self):
        self.client.force_authenticate(user=self.author)
        response = self.client.post(
            self.list_url,
            {
                "title": "Box office weekend",
                "content": "Numbers are in.",
                "category": "industry",
                "source": "Deadline",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        article = NewsArticle.objects.get()
        self.assertEqual(article.author, self.author)
        self.assertIsNotNone(article.publication_date)
        self.assertTrue(response.data["can_edit"])

    def test_source_and_category_are_required(self):
        self.client.force_authenticate(user=self.author)
        response = self.client.post(
            self.list_url,
            {"title": "Rumour", "content": "x", "category": "gossip"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("source", response.data)
        self.assertIn("category", response.data)

    def test_list_filters_by_category_newest_first(self):
        self.make_article(title="Old casting", category="actors", days_ago=5)
        self.make_article(title="New casting", category="actors", days_ago=1)
        self.make_article(title="Studio merger", category="industry")

        response = self.client.get(self.list_url, {"category": "actors"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [a["title"] for a in response.data["results"]],
            ["New casting", "Old casting"],
        )

    def test_recent_returns_ten_newest(self):
        for days_ago in range(12):
            self.make_article(title=f"Story {days_ago}", days_ago=days_ago)

        response = self.client.get(reverse("newsarticle-recent"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 10)
        self.assertEqual(response.data[0]["title"], "Story 0")
        self.assertEqual(response.data[-1]["title"], "Story 9")

    def test_only_author_or_admin_can_edit_or_delete(self):
        article = self.make_article()
        url = reverse("newsarticle-detail", args=[article.id])

        self.client.force_authenticate(user=self.other)
        self.assertEqual(
            self.client.patch(url, {"title": "Hijacked"}, format="json").status_code,
            status.HTTP_403_FORBIDDEN,
        )
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.author)
        response = self.client.patch(url, {"title": "Sequel dated"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        article.refresh_from_db()
        self.assertEqual(article.title, "Sequel dated")

        self.client.force_authenticate(user=self.admin)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(NewsArticle.objects.count(), 0)

    def test_article_survives_author_deletion(self):
        article = self.make_article()
        self.author.delete()

        article.refresh_from_db()
        self.assertIsNone(article.author)

        self.client.force_authenticate(user=self.other)
        response = self.client.patch(
            reverse("newsarticle-detail", args=[article.id]), {"title": "Mine now"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
