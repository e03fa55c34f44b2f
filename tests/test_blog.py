from __future__ import annotations

from fastapi.testclient import TestClient

from blog import schemas, service


class TestDerivedFields:
    def test_excerpt_strips_markup_and_collapses_whitespace(self):
        body = "<p>Bonjour\n  <b>tout</b> le&nbsp;monde &amp; bienvenue</p>"
        assert service.excerpt(body) == "Bonjour tout le monde & bienvenue"

    def test_excerpt_cuts_on_word_boundary(self):
        body = "mot " * 100
        result = service.excerpt(body, max_chars=22)
        assert result == "mot mot mot mot mot…"

    def test_first_image_returns_src_of_first_img(self):
        body = '<p>x</p><IMG alt="a" src="/one.png"><img src="/two.png">'
        assert service.first_image(body) == "/one.png"

    def test_first_image_empty_without_images(self):
        assert service.first_image("<p>texte</p>") == ""

    def test_split_tag(self):
        assert service.split_tag("golang|Go / Golang") == ("golang", "Go / Golang")
        assert service.split_tag("python") == ("python", "python")
        assert service.split_tag("") == ("", "")

    def test_tags_from_posts_keeps_first_display_name(self):
        posts = [
            schemas.Post(id=1, slug="a", title="A", tag_link="go", tag_name="Go"),
            schemas.Post(id=2, slug="b", title="B", tag_link="go", tag_name="Golang"),
            schemas.Post(id=3, slug="c", title="C", tag_link="py", tag_name="Python"),
            schemas.Post(id=4, slug="d", title="D"),
        ]
        assert service.tags_from_posts(posts) == {"go": "Go", "py": "Python"}


class TestBlogPages:
    def test_blog_lists_posts_and_tags(self, client: TestClient, blog_repo, catalog_repo):
        response = client.get("/blog")
        assert response.status_code == 200
        assert "<title>Blogue</title>" in response.text
        assert "Premier billet" in response.text
        assert 'href="/blog/tag/golang"' in response.text
        assert 'src="/content/img/a.png"' in response.text
        catalog_repo.list_latest_episodes.assert_awaited_with(6)

    def test_blog_tag_filters_posts(self, client: TestClient, blog_repo):
        response = client.get("/blog/tag/golang")
        assert response.status_code == 200
        assert "Blogue: golang" in response.text
        blog_repo.list_posts_by_tag.assert_awaited_once()
        assert blog_repo.list_posts_by_tag.await_args.args[0] == "golang"

    def test_unknown_tag_shows_empty_list(self, client: TestClient, blog_repo):
        blog_repo.list_posts_by_tag.return_value = []
        response = client.get("/blog/tag/cobol")
        assert response.status_code == 200
        assert "Aucun billet." in response.text

    def test_blog_entry(self, client: TestClient, blog_repo):
        response = client.get("/blog/show/premier-billet")
        assert response.status_code == 200
        assert "<b>tout</b>" in response.text
        assert 'name="keywords" content="go, web"' in response.text
        blog_repo.get_post_by_slug.assert_awaited_once_with("premier-billet")

    def test_blog_entry_not_found(self, client: TestClient, blog_repo):
        blog_repo.get_post_by_slug.return_value = None
        response = client.get("/blog/show/missing")
        assert response.status_code == 404
        assert response.text == "Not Found"

    def test_blog_entry_without_slug_redirects_to_blog(self, client: TestClient):
        response = client.get("/blog/show/", follow_redirects=False)
        assert response.status_code == 301
        assert response.headers["location"] == "/blog"
