"""Run with: python -m lab_label_service"""

from .app import main

if __name__ == '__main__':
    main()
