"""Blog API tests."""

import pytest

from studio_api.models import BlogComment, BlogImage, BlogPost, BlogTag
from studio_api.models.blog_post import blog_post_tags


def post_payload(**overrides):
    payload = {
        "title": "Shipping our prototype",
        "slug": "shipping-our-prototype",
        "content": "We shipped a multiplayer prototype.",
        "excerpt": "Six weeks from whiteboard to playtest.",
        "author": "Test User",
        "category": "Development",
        "readTime": "5 min read",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def post(client, auth_user):
    """A published post created through the API by the signed-in user."""
    response = client.post("/api/blog", json=post_payload())
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def draft(client, auth_user):
    response = client.post(
        "/api/blog",
        json=post_payload(title="Draft", slug="secret-draft", published=False),
    )
    assert response.status_code == 201
    return response.json()


# --- Posts ---


def test_create_post(client, auth_user):
    """Test creating a post records the author."""
    response = client.post(
        "/api/blog", json=post_payload(featuredImage="https://cdn.example.com/cover.png")
    )
    assert response.status_code == 201
    data = response.json()
    assert data["slug"] == "shipping-our-prototype"
    assert data["authorId"] == auth_user.user_id
    assert data["readTime"] == "5 min read"
    assert data["featuredImage"] == "https://cdn.example.com/cover.png"
    assert data["published"] is True
    assert data["tags"] == []
    assert "createdAt" in data
    assert "updatedAt" in data


def test_create_post_requires_session(client, db):
    """Test anonymous callers cannot write posts."""
    response = client.post("/api/blog", json=post_payload())
    assert response.status_code == 401
    assert response.json() == {"message": "Not authenticated"}
    assert db.query(BlogPost).count() == 0


def test_create_post_duplicate_slug(client, db, post):
    """Test slugs are unique."""
    response = client.post("/api/blog", json=post_payload(title="Another"))
    assert response.status_code == 400
    assert response.json()["message"] == "A post with this slug already exists"
    assert db.query(BlogPost).count() == 1


def test_create_post_reserved_slug(client, auth_user):
    """Test a post cannot take a slug used by a fixed route."""
    response = client.post("/api/blog", json=post_payload(slug="tags"))
    assert response.status_code == 400
    assert response.json()["field"] == "slug"


def test_list_posts_newest_first(client, auth_user):
    """Test listing returns newest posts first."""
    client.post("/api/blog", json=post_payload(slug="first"))
    client.post("/api/blog", json=post_payload(slug="second"))

    response = client.get("/api/blog")
    assert response.status_code == 200
    assert [p["slug"] for p in response.json()] == ["second", "first"]


def test_drafts_hidden_from_anonymous(client, post, draft):
    """Test drafts are listed for signed-in users only."""
    signed_in = client.get("/api/blog").json()
    assert {p["slug"] for p in signed_in} == {"shipping-our-prototype", "secret-draft"}
    assert client.get("/api/blog/secret-draft").status_code == 200

    client.cookies.clear()

    anonymous = client.get("/api/blog").json()
    assert [p["slug"] for p in anonymous] == ["shipping-our-prototype"]
    response = client.get("/api/blog/secret-draft")
    assert response.status_code == 404
    assert response.json() == {"message": "Blog post not found"}


def test_get_post_by_slug(client, post):
    """Test fetching a post by its slug."""
    client.cookies.clear()

    response = client.get(f"/api/blog/{post['slug']}")
    assert response.status_code == 200
    assert response.json()["id"] == post["id"]


def test_get_post_not_found(client):
    response = client.get("/api/blog/missing-post")
    assert response.status_code == 404
    assert response.json()["message"] == "Blog post not found"


def test_list_by_category(client, post, draft):
    """Test category listing excludes drafts and other categories."""
    client.post("/api/blog", json=post_payload(slug="biz", category="Business"))

    response = client.get("/api/blog/category/Development")
    assert response.status_code == 200
    assert [p["slug"] for p in response.json()] == ["shipping-our-prototype"]


def test_search_posts(client, auth_user):
    """Test search matches title, excerpt or content case-insensitively."""
    client.post("/api/blog", json=post_payload(slug="a", title="Roblox Physics"))
    client.post("/api/blog", json=post_payload(slug="b", excerpt="All about ROBLOX"))
    client.post("/api/blog", json=post_payload(slug="c", content="nothing to see"))
    client.post("/api/blog", json=post_payload(slug="d", title="roblox draft", published=False))

    response = client.get("/api/blog/search/roblox")
    assert response.status_code == 200
    assert sorted(p["slug"] for p in response.json()) == ["a", "b"]


def test_search_treats_wildcards_literally(client, post):
    """Test LIKE wildcards in the query are not expanded."""
    response = client.get("/api/blog/search/%25")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.parametrize(
    "path", ["/api/blog/search/a%00b", "/api/blog/category/a%00b", "/api/blog/a%00b"]
)
def test_null_character_in_path_is_rejected(client, post, path):
    """Test a NUL in a path segment is a validation failure, not a database error."""
    response = client.get(path)
    assert response.status_code == 400


def test_update_post(client, post):
    """Test updating only the provided fields."""
    response = client.put(f"/api/blog/{post['id']}", json={"title": "Renamed"})
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Renamed"
    assert data["slug"] == post["slug"]
    assert data["content"] == post["content"]


def test_update_post_clears_featured_image(client, auth_user):
    created = client.post(
        "/api/blog", json=post_payload(featuredImage="https://cdn.example.com/cover.png")
    ).json()

    response = client.put(f"/api/blog/{created['id']}", json={"featuredImage": None})
    assert response.status_code == 200
    assert response.json()["featuredImage"] is None


def test_update_post_slug_conflict(client, post):
    """Test changing a slug to one in use is rejected."""
    other = client.post("/api/blog", json=post_payload(slug="other-post")).json()

    response = client.put(f"/api/blog/{other['id']}", json={"slug": post["slug"]})
    assert response.status_code == 400
    assert response.json()["message"] == "A post with this slug already exists"


def test_update_post_keeps_own_slug(client, post):
    response = client.put(f"/api/blog/{post['id']}", json={"slug": post["slug"], "title": "Same"})
    assert response.status_code == 200


def test_update_post_not_found(client, auth_user):
    response = client.put("/api/blog/9999", json={"title": "Nope"})
    assert response.status_code == 404


def test_update_post_requires_session(client, post):
    client.cookies.clear()
    response = client.put(f"/api/blog/{post['id']}", json={"title": "Hijacked"})
    assert response.status_code == 401


def test_delete_post_cascades(client, db, post):
    """Test deleting a post removes its comments, images and tag links."""
    tag = client.post("/api/blog/tags", json={"name": "Devlog"}).json()
    client.post(f"/api/blog/{post['id']}/tags", json={"tagIds": [tag["id"]]})
    client.post(f"/api/blog/{post['slug']}/comments", json={"content": "Nice"})
    client.post(
        "/api/blog/images", json={"url": "https://cdn.example.com/a.png", "postId": post["id"]}
    )

    response = client.delete(f"/api/blog/{post['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Blog post deleted successfully"}

    db.expire_all()
    assert db.query(BlogPost).count() == 0
    assert db.query(BlogComment).count() == 0
    assert db.query(BlogImage).count() == 0
    assert db.execute(blog_post_tags.select()).all() == []
    assert db.query(BlogTag).count() == 1


def test_delete_post_not_found(client, auth_user):
    response = client.delete("/api/blog/9999")
    assert response.status_code == 404
    assert response.json()["message"] == "Blog post not found"


# --- Comments ---


def test_signed_in_comment_is_approved(client, post, auth_user):
    """Test comments from signed-in users appear immediately."""
    response = client.post(f"/api/blog/{post['slug']}/comments", json={"content": "Great read"})
    assert response.status_code == 201
    data = response.json()
    assert data["approved"] is True
    assert data["userId"] == auth_user.user_id
    assert data["guestName"] is None

    listed = client.get(f"/api/blog/{post['slug']}/comments").json()
    assert [c["content"] for c in listed] == ["Great read"]


def test_guest_comment_waits_for_approval(client, post):
    """Test guest comments are hidden until approved."""
    slug = post["slug"]
    client.cookies.clear()

    response = client.post(
        f"/api/blog/{slug}/comments",
        json={"content": "First!", "guestName": "Guest", "guestEmail": "guest@example.com"},
    )
    assert response.status_code == 201
    comment = response.json()
    assert comment["approved"] is False
    assert comment["guestName"] == "Guest"
    assert "guestEmail" not in comment
    assert client.get(f"/api/blog/{slug}/comments").json() == []

    # Approval needs a session
    assert client.post(f"/api/blog/comments/{comment['id']}/approve").status_code == 401


def test_approve_comment(client, db, post):
    """Test a signed-in user can approve a pending comment."""
    comment = BlogComment(
        post_id=post["id"], guest_name="Guest", guest_email="g@example.com", content="Hi"
    )
    db.add(comment)
    db.commit()

    response = client.post(f"/api/blog/comments/{comment.id}/approve")
    assert response.status_code == 200
    assert response.json()["approved"] is True
    assert len(client.get(f"/api/blog/{post['slug']}/comments").json()) == 1


def test_guest_comment_requires_name_and_email(client, post):
    client.cookies.clear()

    response = client.post(f"/api/blog/{post['slug']}/comments", json={"content": "Hello"})
    assert response.status_code == 400
    assert response.json()["field"] == "guestName"
    assert response.json()["message"] == "Please provide your name and email"

    response = client.post(
        f"/api/blog/{post['slug']}/comments", json={"content": "Hello", "guestName": "Guest"}
    )
    assert response.status_code == 400
    assert response.json()["field"] == "guestEmail"


def test_comment_requires_content(client, post):
    response = client.post(f"/api/blog/{post['slug']}/comments", json={"content": "  "})
    assert response.status_code == 400
    assert response.json()["message"] == "Comment is required"


def test_comment_on_missing_post(client, auth_user):
    response = client.post("/api/blog/nope/comments", json={"content": "Hello"})
    assert response.status_code == 404


def test_delete_comment(client, db, post):
    comment = client.post(f"/api/blog/{post['slug']}/comments", json={"content": "Bye"}).json()

    response = client.delete(f"/api/blog/comments/{comment['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Comment deleted successfully"}
    assert db.query(BlogComment).count() == 0

    response = client.delete(f"/api/blog/comments/{comment['id']}")
    assert response.status_code == 404
    assert response.json()["message"] == "Comment not found"


# --- Tags ---


def test_create_and_list_tags(client, auth_user):
    """Test tags are listed by name and not shadowed by the slug route."""
    client.post("/api/blog/tags", json={"name": "Roblox"})
    created = client.post("/api/blog/tags", json={"name": "Art Pipeline"})
    assert created.status_code == 201
    assert created.json()["slug"] == "art-pipeline"

    response = client.get("/api/blog/tags")
    assert response.status_code == 200
    assert [t["name"] for t in response.json()] == ["Art Pipeline", "Roblox"]


def test_create_tag_duplicate(client, auth_user):
    client.post("/api/blog/tags", json={"name": "Roblox"})

    response = client.post("/api/blog/tags", json={"name": "roblox!"})
    assert response.status_code == 400
    assert response.json()["message"] == "A tag with this name already exists"


def test_create_tag_requires_session(client):
    response = client.post("/api/blog/tags", json={"name": "Roblox"})
    assert response.status_code == 401


def test_set_post_tags_replaces_existing(client, post):
    """Test setting tags replaces the previous set."""
    first = client.post("/api/blog/tags", json={"name": "Devlog"}).json()
    second = client.post("/api/blog/tags", json={"name": "Art"}).json()

    response = client.post(f"/api/blog/{post['id']}/tags", json={"tagIds": [first["id"]]})
    assert response.status_code == 200
    assert response.json() == {"message": "Tags updated successfully"}

    client.post(f"/api/blog/{post['id']}/tags", json={"tagIds": [second["id"], first["id"]]})
    tags = client.get(f"/api/blog/{post['slug']}").json()["tags"]
    assert [t["name"] for t in tags] == ["Art", "Devlog"]

    client.post(f"/api/blog/{post['id']}/tags", json={"tagIds": []})
    assert client.get(f"/api/blog/{post['slug']}").json()["tags"] == []


def test_set_post_tags_unknown_tag(client, post):
    response = client.post(f"/api/blog/{post['id']}/tags", json={"tagIds": [4242]})
    assert response.status_code == 404
    assert response.json()["message"] == "Tag not found: 4242"


def test_set_post_tags_unknown_post(client, auth_user):
    response = client.post("/api/blog/9999/tags", json={"tagIds": []})
    assert response.status_code == 404
    assert response.json()["message"] == "Blog post not found"


# --- Images ---


def test_create_and_list_images(client, post, auth_user):
    """Test images are attached to posts and attributed to the uploader."""
    response = client.post(
        "/api/blog/images",
        json={
            "url": "https://cdn.example.com/shot.png",
            "altText": "Screenshot",
            "postId": post["id"],
        },
    )
    assert response.status_code == 201
    image = response.json()
    assert image["uploadedBy"] == auth_user.user_id
    assert image["caption"] is None

    listed = client.get(f"/api/blog/{post['id']}/images").json()
    assert [i["id"] for i in listed] == [image["id"]]


def test_create_image_without_post(client, auth_user):
    response = client.post("/api/blog/images", json={"url": "https://cdn.example.com/x.png"})
    assert response.status_code == 201
    assert response.json()["postId"] is None


def test_create_image_for_missing_post(client, auth_user):
    response = client.post(
        "/api/blog/images", json={"url": "https://cdn.example.com/x.png", "postId": 9999}
    )
    assert response.status_code == 404


def test_create_image_requires_url(client, auth_user):
    response = client.post("/api/blog/images", json={"url": "not-a-url"})
    assert response.status_code == 400
    assert response.json()["field"] == "url"


def test_delete_image(client, auth_user):
    image = client.post("/api/blog/images", json={"url": "https://cdn.example.com/x.png"}).json()

    response = client.delete(f"/api/blog/images/{image['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Image deleted successfully"}

    response = client.delete(f"/api/blog/images/{image['id']}")
    assert response.status_code == 404
    assert response.json()["message"] == "Image not found"
