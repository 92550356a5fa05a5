"""JSON API for posts, comments, writer analytics and popular content."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from config import settings
from middleware.auth import current_user_id, login_required
from services.comment_service import add_comment, delete_comment, list_comments
from services.follower_service import list_followers
from services.post_service import (
    create_post,
    delete_post,
    get_post_and_record_view,
    list_owner_posts,
    list_published_posts,
    update_post_status,
)
from services.stats_service import popular_content, writer_stats
from utils.dates import parse_window_days
from utils.pagination import PageRequest
from utils.request_body import json_body
from utils.serialization import serialize, serialize_many

posts_bp = Blueprint("posts", __name__)


# ---------------------------------------------------------------- dashboard --

@posts_bp.get("/api/posts/admin-analytics")
@login_required
def api_stats():
    days = parse_window_days(
        request.args.get("query"),
        settings.STATS_DEFAULT_DAYS,
        max_days=settings.STATS_MAX_DAYS,
    )
    stats = writer_stats(current_user_id(), days)
    return jsonify({
        "success": True,
        "message": "Data loaded successfully",
        **serialize(stats),
    })


@posts_bp.get("/api/posts/admin-followers")
@login_required
def api_followers():
    page_request = PageRequest.from_args(request.args, default_limit=settings.OWNER_PAGE_SIZE)
    page = list_followers(current_user_id(), page_request)
    return jsonify({
        "success": True,
        "data": serialize_many(page.items),
        "total": page.total,
        "numOfPages": page.num_of_pages,
        "page": page.page,
    })


@posts_bp.get("/api/posts/admin-content")
@login_required
def api_post_content():
    page_request = PageRequest.from_args(request.args, default_limit=settings.OWNER_PAGE_SIZE)
    page = list_owner_posts(current_user_id(), page_request)
    return jsonify({
        "success": True,
        "message": "Content Loaded successfully",
        "totalPost": page.total,
        "data": serialize_many(page.items),
        "page": page.page,
        "numOfPage": page.num_of_pages,
    })


@posts_bp.post("/api/posts/create-post")
@login_required
def api_create_post():
    post = create_post(current_user_id(), json_body())
    return jsonify({
        "success": True,
        "message": "Post created successfully",
        "data": serialize(post),
    })


@posts_bp.post("/api/posts/comment/<post_id>")
@login_required
def api_comment_post(post_id: str):
    comment = add_comment(post_id, current_user_id(), json_body().get("comment"))
    return jsonify({
        "success": True,
        "message": "Comment published successfully",
        "newComment": serialize(comment),
    }), 201


@posts_bp.patch("/api/posts/update/<post_id>")
@login_required
def api_update_post(post_id: str):
    post = update_post_status(post_id, json_body().get("status"))
    return jsonify({
        "success": True,
        "message": "Action performed successfully",
        "data": serialize(post),
    })


@posts_bp.delete("/api/posts/<post_id>")
@login_required
def api_delete_post(post_id: str):
    delete_post(post_id, current_user_id())
    return jsonify({"success": True, "message": "Deleted successfully"})


@posts_bp.delete("/api/posts/comment/<comment_id>/<post_id>")
@login_required
def api_delete_comment(comment_id: str, post_id: str):
    delete_comment(comment_id, post_id)
    return jsonify({"success": True, "message": "Comment removed successfully"})


# ------------------------------------------------------------------- public --

@posts_bp.get("/api/posts/")
def api_list_posts():
    page_request = PageRequest.from_args(request.args, default_limit=settings.PUBLIC_PAGE_SIZE)
    page = list_published_posts(
        page_request,
        category=request.args.get("cat"),
        writer_id=request.args.get("writerId"),
    )
    return jsonify({
        "success": True,
        "totalPost": page.total,
        "data": serialize_many(page.items),
        "page": page.page,
        "numOfPage": page.num_of_pages,
    })


@posts_bp.get("/api/posts/popular")
def api_popular_content():
    content = popular_content()
    return jsonify({
        "success": True,
        "message": "Successful",
        "data": serialize(content),
    })


@posts_bp.get("/api/posts/comments/<post_id>")
def api_list_comments(post_id: str):
    comments = list_comments(post_id)
    return jsonify({
        "success": True,
        "message": "comment received",
        "data": serialize_many(comments),
    })


@posts_bp.get("/api/posts/<post_id>")
def api_get_post(post_id: str):
    post = get_post_and_record_view(post_id)
    return jsonify({
        "success": True,
        "message": "Successful",
        "data": serialize(post),
    })
