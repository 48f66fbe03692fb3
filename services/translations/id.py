# -*- coding: utf-8 -*-
"""Indonesian translations."""

ID_TRANSLATIONS = {
    # Dialogs
    "dialog.error": "Kesalahan",
    "dialog.warning": "Peringatan",
    "dialog.success": "Berhasil",

    # API errors
    "error.api.connection": "Tidak dapat terhubung ke server. Silakan coba lagi.",
    "error.api.timeout": "Permintaan ke server melebihi batas waktu.",

    # Wizard navigation
    "wizard.button.previous": "Sebelumnya",
    "wizard.button.next": "Selanjutnya",
    "wizard.button.finish": "Selesai",
    "wizard.progress": "Langkah {current} dari {total}",
    "wizard.progress.percent": "{percent}% Selesai",
    "wizard.nav.step_invalid": "Lengkapi langkah \"{step}\" sebelum melanjutkan.",
    "wizard.nav.previous_steps_invalid": "Masih ada langkah sebelumnya yang belum valid: {steps}",
    "wizard.nav.completed": "Formulir sudah dikirim.",
    "wizard.nav.submitting": "Sedang mengirim data...",

    # Wizard submission
    "wizard.error.incomplete": "Data tidak lengkap. Langkah yang belum selesai: {steps}",
    "wizard.error.stored_data_detected": "Data form terdeteksi di penyimpanan. Silakan muat ulang formulir untuk memulihkan data.",
    "wizard.error.validation_details": "Kesalahan validasi:\n{details}",
    "wizard.error.submit_failed": "Gagal mengirim data. Silakan coba lagi.",
    "wizard.success.submitted": "Data berhasil dikirim.",

    # Property creation flow
    "flow.property.success": "Properti berhasil dibuat! Menunggu persetujuan admin.",
    "flow.property.error": "Gagal membuat properti",
    "flow.property.step.basic_data": "Data Dasar",
    "flow.property.step.basic_data.description": "Informasi dasar tentang kos Anda",
    "flow.property.step.location": "Lokasi",
    "flow.property.step.location.description": "Alamat dan koordinat kos",
    "flow.property.step.images": "Foto",
    "flow.property.step.images.description": "Upload foto bangunan dan fasilitas",
    "flow.property.step.facilities_rules": "Fasilitas & Peraturan",
    "flow.property.step.facilities_rules.description": "Fasilitas yang tersedia dan peraturan kos",

    # Room creation flow
    "flow.room.success": "Kamar berhasil dibuat! Properti dalam proses review.",
    "flow.room.error": "Gagal membuat kamar",
    "flow.room.step.photos": "Foto Kamar",
    "flow.room.step.photos.description": "Upload foto untuk setiap jenis kamar",
    "flow.room.step.facilities": "Fasilitas",
    "flow.room.step.facilities.description": "Pilih fasilitas kamar dan kamar mandi",
    "flow.room.step.pricing": "Harga",
    "flow.room.step.pricing.description": "Tentukan harga sewa dan opsi pembayaran",
    "flow.room.step.management": "Pengaturan Kamar",
    "flow.room.step.management.description": "Atur detail setiap kamar",

    # Room type creation flow
    "flow.room_type.success": "Jenis kamar berhasil ditambahkan.",
    "flow.room_type.error": "Gagal menambahkan jenis kamar",
    "flow.room_type.step.info": "Info Jenis Kamar",
    "flow.room_type.step.info.description": "Nama jenis kamar dan jumlah kamar",
    "flow.room_type.step.description": "Deskripsi",
    "flow.room_type.step.description.description": "Ukuran dan deskripsi kamar",
    "flow.room_type.step.photos": "Foto",
    "flow.room_type.step.photos.description": "Foto jenis kamar",
    "flow.room_type.step.facilities": "Fasilitas",
    "flow.room_type.step.facilities.description": "Fasilitas kamar dan kamar mandi",
    "flow.room_type.step.pricing": "Harga",
    "flow.room_type.step.pricing.description": "Harga sewa dan deposit",
}
