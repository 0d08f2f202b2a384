from newsletter_site.main import run

if __name__ == "__main__":
    run()
