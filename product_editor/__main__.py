"""
@PURPOSE: 商品编辑 CLI 入口，提供命令行查看与更新商品
@OUTLINE:
  - app: Typer应用实例
  - def show(): 加载并展示商品编辑页
  - def update(): 修改字段并保存商品
  - def slug(): 生成 slug
  - def info(): 显示当前配置
@DEPENDENCIES:
  - 内部: config.settings, core.session, views, utils.logger_setup
  - 外部: typer, rich
"""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .api.client import SellerApiClient
from .config.settings import settings
from .core.session import EditProductSession
from .errors import ProductEditError
from .models.form import Credentials, FormStep
from .models.image import StagedFile
from .utils.logger_setup import setup_logger
from .utils.slug import generate_slug
from .views import VIEWS, get_view

app = typer.Typer(
    name="product-editor",
    help="卖家后台商品编辑工具",
    add_completion=False,
)

console = Console()


class ConsoleNotifier:
    """在终端输出通知."""

    def show_error(self, title: str, body: str) -> None:
        console.print(f"[red]✗ {escape(title)}:[/red] {escape(body)}", highlight=False)

    def show_success(self, title: str, body: str) -> None:
        console.print(f"[green]✓ {escape(title)}:[/green] {escape(body)}", highlight=False)


def create_client(token: str) -> SellerApiClient:
    return SellerApiClient(token)


def _credentials(token: str | None, seller_id: str | None) -> Credentials:
    token = token or settings.seller_token
    if not token:
        console.print("[red]✗ 请提供卖家 token[/red]")
        console.print("  方式1: 命令行 --token xxx")
        console.print("  方式2: 配置 .env 文件 SELLER_TOKEN=xxx")
        raise typer.Exit(1)
    return Credentials(token=token, seller_id=seller_id or settings.seller_id)


def _parse_pairs(values: list[str] | None, option: str) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for raw in values or []:
        key, sep, value = raw.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"格式应为 key=value: {raw}", param_hint=option)
        pairs.append((key.strip(), value))
    return pairs


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
):
    """卖家后台商品编辑工具."""
    config = settings.logging
    if verbose:
        config = config.model_copy(update={"level": "DEBUG"})
    setup_logger(config, force=True)


@app.command()
def show(
    product_id: str = typer.Argument(..., help="商品 ID"),
    layout: str = typer.Option("desktop", "--layout", "-l", help="布局: desktop|mobile"),
    step: int = typer.Option(1, "--step", "-s", min=1, max=4, help="移动端展示的步骤"),
    token: str = typer.Option(None, "--token", help="卖家 token（默认读取配置）"),
    seller_id: str = typer.Option(None, "--seller-id", help="卖家 ID（默认读取配置）"),
):
    """加载商品并展示编辑页.

    Examples:
        product-editor show 42
        product-editor show 42 --layout mobile --step 2
    """
    if layout not in VIEWS:
        raise typer.BadParameter(f"可选布局: {', '.join(VIEWS)}", param_hint="--layout")
    credentials = _credentials(token, seller_id)

    async def _show() -> bool:
        async with create_client(credentials.token) as client:
            session = EditProductSession(
                client, credentials, product_id, notifier=ConsoleNotifier()
            )
            try:
                loaded = await session.open()
                session.step = FormStep(step)
                console.print(get_view(layout, session).render())
                return loaded
            finally:
                session.close()

    if not asyncio.run(_show()):
        raise typer.Exit(1)


@app.command()
def update(
    product_id: str = typer.Argument(..., help="商品 ID"),
    fields: list[str] = typer.Option(None, "--set", help="基础字段 field=value, 可重复"),
    settings_values: list[str] = typer.Option(None, "--setting", help="商品设置 field=value"),
    variant_values: list[str] = typer.Option(None, "--variant", help="主变体字段 field=value"),
    spec_values: list[str] = typer.Option(None, "--spec", help="规格值 属性ID=value"),
    main_image: Path = typer.Option(None, "--main-image", help="新主图文件"),
    gallery: list[Path] = typer.Option(None, "--gallery", help="追加图集文件, 可重复"),
    token: str = typer.Option(None, "--token", help="卖家 token（默认读取配置）"),
    seller_id: str = typer.Option(None, "--seller-id", help="卖家 ID（默认读取配置）"),
):
    """修改商品并保存.

    Examples:
        product-editor update 42 --set name="Cotton Kurta" --variant price=499.00
        product-editor update 42 --setting is_returnable=true --spec 7=Cotton
        product-editor update 42 --main-image front.png --gallery side.png
    """
    credentials = _credentials(token, seller_id)
    field_pairs = _parse_pairs(fields, "--set")
    setting_pairs = _parse_pairs(settings_values, "--setting")
    variant_pairs = _parse_pairs(variant_values, "--variant")
    spec_pairs = _parse_pairs(spec_values, "--spec")

    async def _update() -> bool:
        async with create_client(credentials.token) as client:
            session = EditProductSession(
                client,
                credentials,
                product_id,
                notifier=ConsoleNotifier(),
                navigator=lambda path: console.print(f"[dim]→ 跳转: {path}[/dim]"),
                redirect_delay=0,
            )
            try:
                if not await session.open():
                    return False

                for key, value in field_pairs:
                    session.set_field(key, value)
                for key, value in setting_pairs:
                    session.set_setting(key, value)
                for key, value in variant_pairs:
                    session.variants.update_primary(key, value)
                for key, value in spec_pairs:
                    session.set_spec_value(key, value)
                if main_image is not None:
                    session.images.set_main(StagedFile.from_path(main_image))
                if gallery:
                    session.images.add_gallery_files(StagedFile.from_path(p) for p in gallery)

                result = await session.save()
                # 等待延迟为 0 的跳转回调执行
                while session.saver.redirect_pending:
                    await asyncio.sleep(0)
                return result.success
            except (ProductEditError, OSError) as e:
                console.print(f"[red]✗ {escape(str(e))}[/red]", highlight=False)
                return False
            finally:
                session.close()

    if not asyncio.run(_update()):
        raise typer.Exit(1)


@app.command()
def slug(text: str = typer.Argument(..., help="商品名称")):
    """生成商品 slug.

    Examples:
        product-editor slug "Men's T-Shirt!! 100% Cotton"
    """
    console.print(generate_slug(text), markup=False, highlight=False)


@app.command()
def info():
    """显示当前配置.

    Examples:
        product-editor info
    """
    console.print(Panel.fit("⚙️ 商品编辑工具配置", style="bold blue"))

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("配置项", style="cyan")
    table.add_column("值")

    data = settings.to_dict()
    table.add_row("环境", data["environment"])
    table.add_row("API 地址", f"{settings.api.base_url}{settings.api.api_prefix}")
    table.add_row("请求超时", f"{settings.api.timeout}s / 上传 {settings.api.upload_timeout}s")
    table.add_row("卖家 ID", data["seller_id"] or "-")
    table.add_row("卖家 token", data["seller_token"] or "未配置")
    table.add_row("日志", f"{settings.logging.level} ({settings.logging.format})")
    table.add_row("区分加载失败", str(settings.reference.distinguish_failures))
    table.add_row(
        "保存后跳转", f"{settings.form.redirect_path} ({settings.form.redirect_delay}s)"
    )
    console.print(table)


if __name__ == "__main__":
    app()
