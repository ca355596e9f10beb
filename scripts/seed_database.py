"""
Seed Script: admin account and sample content

Usage:
    python scripts/seed_database.py [--no-samples]
"""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from extensions import db
from utils.seed import seed_admin_user, seed_sample_content


def main():
    """Main seeding function"""
    print("=" * 60)
    print("Portfolio Database Seed")
    print("=" * 60)

    app = create_app(os.environ.get('FLASK_ENV'))
    with app.app_context():
        db.create_all()
        print("[OK] Database tables ready")

        user, created = seed_admin_user()
        if created:
            print(f"[OK] Admin user created: {user.email}")
        else:
            print(f"[--] Admin user already exists: {user.email}")

        if '--no-samples' not in sys.argv:
            counts = seed_sample_content(author=user)
            print(f"[OK] Sample projects created: {counts['projects']}")
            print(f"[OK] Sample skills created: {counts['skills']}")
            print(f"[OK] Sample blog posts created: {counts['blogs']}")

    print("=" * 60)
    print("Seeding completed")


if __name__ == '__main__':
    main()
