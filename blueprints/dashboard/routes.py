"""
Dashboard Routes - Admin content management
Handles: Blog and project create / edit / delete through the portfolio API

Every route requires an admin session. API calls carry the stored bearer
token; the API stays the source of truth and pages re-fetch after writes.
"""

from flask import render_template, session, redirect, url_for, request, flash, current_app, abort
from pydantic import ValidationError
from extensions import api
from models import BlogInput, ProjectInput
from utils.api import ApiError, NotFoundError, UnauthorizedError
from utils.auth import get_auth
from utils.decorators import login_required, admin_required
from utils.helpers import validation_messages
from . import dashboard_bp

DELETED_KEY = 'recently_deleted'


def api_failure(error, message):
    """Flash an API failure. A rejected token ends the session."""
    if isinstance(error, UnauthorizedError):
        get_auth().logout()
        flash('Your session has expired. Please log in again.', 'error')
        abort(redirect(url_for('auth.login')))
    current_app.logger.warning(f"{message}: {str(error)}")
    flash(f'{message}: {error.message}', 'error')


def remember_deleted(kind, item_id):
    session[DELETED_KEY] = [kind, str(item_id)]


def without_deleted(kind, items):
    """Drop an item deleted on the previous request if the API still lists it"""
    deleted = session.get(DELETED_KEY)
    if not deleted or deleted[0] != kind:
        return items
    session.pop(DELETED_KEY, None)
    return [item for item in items if item.id != deleted[1]]


@dashboard_bp.route('/')
@login_required
@admin_required
def index():
    """Dashboard home - blogs and projects side by side"""
    token = get_auth().token

    try:
        blogs = without_deleted('blog', api.list_blogs(token=token))
    except ApiError as e:
        api_failure(e, 'Failed to load blogs')
        blogs = []

    try:
        projects = without_deleted('project', api.list_projects(token=token))
    except ApiError as e:
        api_failure(e, 'Failed to load projects')
        projects = []

    return render_template('dashboard/index.html', blogs=blogs, projects=projects)


# Blogs

@dashboard_bp.route('/blogs/new', methods=['GET', 'POST'])
@login_required
@admin_required
def add_blog():
    """Create a blog post"""
    if request.method == 'POST':
        try:
            blog = BlogInput.from_form(request.form)
        except ValidationError as e:
            for msg in validation_messages(e):
                flash(msg, 'error')
            return render_template('dashboard/blog_form.html', form=request.form, blog_id=None), 400

        try:
            api.create_blog(blog, token=get_auth().token)
        except ApiError as e:
            api_failure(e, 'Failed to create blog')
            return render_template('dashboard/blog_form.html', form=request.form, blog_id=None), 502

        current_app.logger.info(f"Blog created: {blog.slug}")
        flash('Blog created successfully', 'success')
        return redirect(url_for('dashboard.index'))

    return render_template('dashboard/blog_form.html', form={}, blog_id=None)


@dashboard_bp.route('/blogs/edit/<blog_id>', methods=['GET', 'POST'])
@login_required
@admin_required
def edit_blog(blog_id):
    """Edit an existing blog post"""
    token = get_auth().token

    if request.method == 'POST':
        try:
            blog = BlogInput.from_form(request.form)
        except ValidationError as e:
            for msg in validation_messages(e):
                flash(msg, 'error')
            return render_template('dashboard/blog_form.html', form=request.form, blog_id=blog_id), 400

        try:
            api.update_blog(blog_id, blog, token=token)
        except NotFoundError:
            flash('Blog not found', 'error')
            return redirect(url_for('dashboard.index'))
        except ApiError as e:
            api_failure(e, 'Failed to update blog')
            return render_template('dashboard/blog_form.html', form=request.form, blog_id=blog_id), 502

        current_app.logger.info(f"Blog updated: {blog_id}")
        flash('Blog updated successfully', 'success')
        return redirect(url_for('dashboard.index'))

    try:
        existing = api.get_blog(blog_id, token=token)
    except NotFoundError:
        flash('Blog not found', 'error')
        return redirect(url_for('dashboard.index'))
    except ApiError as e:
        api_failure(e, 'Failed to fetch blog')
        return redirect(url_for('dashboard.index'))

    return render_template('dashboard/blog_form.html', form=existing.to_form(), blog_id=blog_id)


@dashboard_bp.route('/blogs/delete/<blog_id>', methods=['GET', 'POST'])
@login_required
@admin_required
def delete_blog(blog_id):
    """Confirm on GET, delete on POST"""
    if request.method == 'GET':
        return render_template('dashboard/confirm_delete.html',
                               kind='blog',
                               item_id=blog_id,
                               title=request.args.get('title', ''),
                               action=url_for('dashboard.delete_blog', blog_id=blog_id))

    try:
        api.delete_blog(blog_id, token=get_auth().token)
    except ApiError as e:
        api_failure(e, 'Failed to delete blog')
        return redirect(url_for('dashboard.index'))

    remember_deleted('blog', blog_id)
    current_app.logger.info(f"Blog deleted: {blog_id}")
    flash('Blog deleted successfully', 'success')
    return redirect(url_for('dashboard.index'))


# Projects

@dashboard_bp.route('/projects/new', methods=['GET', 'POST'])
@login_required
@admin_required
def add_project():
    """Create a project"""
    if request.method == 'POST':
        try:
            project = ProjectInput.from_form(request.form)
        except ValidationError as e:
            for msg in validation_messages(e):
                flash(msg, 'error')
            return render_template('dashboard/project_form.html', form=request.form, project_id=None), 400

        try:
            api.create_project(project, token=get_auth().token)
        except ApiError as e:
            api_failure(e, 'Failed to create project')
            return render_template('dashboard/project_form.html', form=request.form, project_id=None), 502

        current_app.logger.info(f"Project created: {project.title}")
        flash('Project created successfully', 'success')
        return redirect(url_for('dashboard.index'))

    return render_template('dashboard/project_form.html', form={}, project_id=None)


@dashboard_bp.route('/projects/edit/<project_id>', methods=['GET', 'POST'])
@login_required
@admin_required
def edit_project(project_id):
    """Edit an existing project"""
    token = get_auth().token

    if request.method == 'POST':
        try:
            project = ProjectInput.from_form(request.form)
        except ValidationError as e:
            for msg in validation_messages(e):
                flash(msg, 'error')
            return render_template('dashboard/project_form.html', form=request.form, project_id=project_id), 400

        try:
            api.update_project(project_id, project, token=token)
        except NotFoundError:
            flash('Project not found', 'error')
            return redirect(url_for('dashboard.index'))
        except ApiError as e:
            api_failure(e, 'Failed to update project')
            return render_template('dashboard/project_form.html', form=request.form, project_id=project_id), 502

        current_app.logger.info(f"Project updated: {project_id}")
        flash('Project updated successfully', 'success')
        return redirect(url_for('dashboard.index'))

    try:
        existing = api.get_project(project_id, token=token)
    except NotFoundError:
        flash('Project not found', 'error')
        return redirect(url_for('dashboard.index'))
    except ApiError as e:
        api_failure(e, 'Failed to fetch project')
        return redirect(url_for('dashboard.index'))

    return render_template('dashboard/project_form.html', form=existing.to_form(), project_id=project_id)


@dashboard_bp.route('/projects/delete/<project_id>', methods=['GET', 'POST'])
@login_required
@admin_required
def delete_project(project_id):
    """Confirm on GET, delete on POST"""
    if request.method == 'GET':
        return render_template('dashboard/confirm_delete.html',
                               kind='project',
                               item_id=project_id,
                               title=request.args.get('title', ''),
                               action=url_for('dashboard.delete_project', project_id=project_id))

    try:
        api.delete_project(project_id, token=get_auth().token)
    except ApiError as e:
        api_failure(e, 'Failed to delete project')
        return redirect(url_for('dashboard.index'))

    remember_deleted('project', project_id)
    current_app.logger.info(f"Project deleted: {project_id}")
    flash('Project deleted successfully', 'success')
    return redirect(url_for('dashboard.index'))
