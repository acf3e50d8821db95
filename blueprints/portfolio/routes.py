"""
Portfolio Routes - Public portfolio views
Handles: Project list, blog list and single blog posts
"""

from flask import render_template, flash, current_app
from extensions import api
from utils.api import ApiError, NotFoundError
from . import portfolio_bp


@portfolio_bp.route('/projects')
def projects():
    """Public project list, featured first"""
    load_failed = False
    try:
        items = api.list_projects()
    except ApiError as e:
        current_app.logger.warning(f"Could not load projects: {str(e)}")
        flash('Could not load projects. Please try again later.', 'error')
        items, load_failed = [], True

    items = sorted(items, key=lambda p: not p.featured)
    return render_template('portfolio/projects.html', projects=items, load_failed=load_failed)


@portfolio_bp.route('/blogs')
def blogs():
    """Public blog list"""
    load_failed = False
    try:
        items = api.list_blogs()
    except ApiError as e:
        current_app.logger.warning(f"Could not load blogs: {str(e)}")
        flash('Could not load blog posts. Please try again later.', 'error')
        items, load_failed = [], True

    return render_template('portfolio/blogs.html', blogs=items, load_failed=load_failed)


@portfolio_bp.route('/blogs/<slug>')
def blog_detail(slug):
    """Single blog post rendered from markdown"""
    try:
        blog = api.get_blog(slug)
    except NotFoundError:
        return render_template('portfolio/blog_detail.html', blog=None), 404
    except ApiError as e:
        current_app.logger.warning(f"Could not load blog {slug}: {str(e)}")
        flash('Could not load this post. Please try again later.', 'error')
        return render_template('portfolio/blog_detail.html', blog=None, load_failed=True), 502

    return render_template('portfolio/blog_detail.html', blog=blog)
