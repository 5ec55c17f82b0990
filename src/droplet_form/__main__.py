"""Entry point for running droplet_form as a module"""

from droplet_form.cli import main

if __name__ == "__main__":
    main()
