#!/usr/bin/env python3
"""Initialize the database and optionally seed a user, project and membership."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from projectsync.db.database import get_db, reset_db
from projectsync.db.project_repo import ProjectRepository
from projectsync.db.user_repo import UserRepository
from projectsync.models.project import Project, ProjectRole, ProjectUser
from projectsync.models.user import User


def main():
    parser = argparse.ArgumentParser(description="Initialize the database")
    parser.add_argument("--db-path", type=str, help="Override database path")
    parser.add_argument("--seed-user", type=str, metavar="USERNAME", help="Create a user")
    parser.add_argument("--email", type=str, help="E-mail for --seed-user")
    parser.add_argument("--seed-project", type=str, metavar="TITLE", help="Create a project")
    parser.add_argument(
        "--role",
        choices=[r.value for r in ProjectRole],
        default=ProjectRole.OWNER.value,
        help="Role of the seeded user in the seeded project",
    )
    args = parser.parse_args()

    db_path = Path(args.db_path) if args.db_path else None
    db = get_db(db_path)
    print(f"Database initialized at: {db.path}")

    user = None
    if args.seed_user:
        user = User(username=args.seed_user, email=args.email or f"{args.seed_user}@localhost")
        UserRepository(db).create(user)
        print(f"  Created user: {user.username} ({user.user_id})")

    if args.seed_project:
        projects = ProjectRepository(db)
        project = projects.create(Project(title=args.seed_project))
        print(f"  Created project: {project.title} ({project.project_id})")
        if user:
            projects.add_member(
                ProjectUser(project_id=project.project_id, user_id=user.user_id, role=ProjectRole(args.role))
            )
            print(f"  Added {user.username} as {args.role}")

    reset_db()
    print("Done.")


if __name__ == "__main__":
    main()
